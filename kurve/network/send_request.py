# -*- coding: utf-8 -*-

import json
import logging

from . import errors

_logger = logging.getLogger(__name__)


@errors.handler
def get(url, session, access_token, binary=False, timeout=None):
    """Performs an authenticated HTTP GET request, then returns the body.

    This function is blocking; it's intended to be executed by a thread pool.

    Args:
        url (str): absolute URL.
        session (requests.Session)
        access_token (str): OAuth2 bearer token.
        binary (boolean, optional): if True, returns the raw body (bytes)
            instead of the decoded text.
        timeout (int, optional): delay, in seconds, before giving up.
    Returns:
        str/bytes: the body of the response.
    Raises:
        GraphError: if the request fails, or if the HTTP status is not 2XX.
    """
    headers = {'Authorization': 'Bearer %s' % access_token}
    response = session.get(url, headers=headers, timeout=timeout)

    _logger.log(5, 'request GET %s -> %s', url, response.status_code)

    response.raise_for_status()

    if binary:
        return response.content
    return response.text


def parse_odata(text):
    """Parse an OData JSON response.

    Args:
        text (str): JSON body.
    Returns:
        dict: the decoded object.
    Raises:
        ODataError: if the body contains an `error` member, or if it's not a
            valid JSON object.
    """
    try:
        content = json.loads(text)
    except ValueError:
        _logger.warning('Invalid JSON response: %.200s', text)
        raise errors.ODataError({'message': 'Invalid JSON response',
                                 'body': text})
    if not isinstance(content, dict):
        raise errors.ODataError({'message': 'Unexpected JSON response',
                                 'body': content})
    if content.get('error'):
        raise errors.ODataError(content['error'])
    return content
