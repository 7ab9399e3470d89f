# -*- coding: utf-8 -*-

from .util import Value


class Client(object):
    """Continuation created by each call to ``then()``.

    A Client binds a pair of callbacks to a downstream Deferred. When the
    upstream Deferred is settled, the matching callback is called and its
    outcome settles the downstream Deferred:

    - a callback returning normally resolves the downstream Deferred with the
      returned value (including the error callback: the error is recovered).
    - a callback raising an exception rejects the downstream Deferred.
    - a missing callback transfers the upstream outcome as is.

    A Client is consumed exactly once, then discarded.

    Attributes:
        result (Deferred): downstream Deferred. It shares the dispatcher of
            the upstream Deferred.
    """

    def __init__(self, result, success_callback=None, error_callback=None):
        self.result = result
        self._dispatcher = result.dispatcher
        self._success_callback = success_callback
        self._error_callback = error_callback

    def resolve(self, value, defer):
        """Called when the upstream Deferred is resolved.

        Args:
            value: upstream value.
            defer (boolean): if True, the callback is dispatched instead of
                being called in the current stack.
        """
        if not callable(self._success_callback):
            self.result.resolve(Value(value))
            return
        self._call(self._success_callback, value, defer)

    def reject(self, error, defer):
        """Called when the upstream Deferred is rejected.

        Args:
            error: upstream rejection reason.
            defer (boolean): if True, the callback is dispatched instead of
                being called in the current stack.
        """
        if not callable(self._error_callback):
            self.result.reject(error)
            return
        self._call(self._error_callback, error, defer)

    def _call(self, callback, arg, defer):
        if defer:
            self._dispatcher(lambda: self._dispatch_callback(callback, arg))
        else:
            self._dispatch_callback(callback, arg)

    def _dispatch_callback(self, callback, arg):
        try:
            result = callback(arg)
        except Exception as error:
            self.result.reject(error)
            return
        self.result.resolve(result)
