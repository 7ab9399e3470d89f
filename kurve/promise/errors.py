# -*- coding: utf-8 -*-


class RecursiveResolutionError(TypeError):
    """A Deferred has been resolved with its own Promise."""

    def __init__(self, message='recursive resolution'):
        TypeError.__init__(self, message)


class RejectionError(Exception):
    """Raised in place of a rejection reason who is not an exception.

    Attributes:
        reason: the original rejection value (a string, a dict, ...).
    """

    def __init__(self, reason):
        Exception.__init__(self, 'Promise rejected: %r' % (reason,))
        self.reason = reason


class TimeoutError(Exception):
    """An operation could not be executed within the time allowed."""
    pass
