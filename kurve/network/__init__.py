# -*- coding: utf-8 -*-
"""Network module

This module performs the HTTPS requests to the Graph API, using `requests`.
The functions are blocking: the Graph client executes them in a thread pool,
and gets the results as Promise instances.

In case of error, an Exception from `kurve.network.errors` is raised, with a
human-readable message.
"""

from . import errors  # noqa
from .send_request import get, parse_odata

__all__ = ['errors', 'get', 'parse_odata']
