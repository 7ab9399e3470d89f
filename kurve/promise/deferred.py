# -*- coding: utf-8 -*-

from functools import partial
import logging

from .client import Client
from .dispatch import get_task_queue
from .errors import RecursiveResolutionError
from .promise import Promise
from .util import Value, is_thenable

_logger = logging.getLogger(__name__)


class Deferred(object):
    """Producer side of an asynchronous value.

    A Deferred is the "creator" side of an async task, whereas a Promise
    represents the asynchronous value from the "consumer" side.

    The Deferred is settled once, by a call to ``resolve()`` or ``reject()``.
    Later calls are ignored. The settlement itself, and the execution of the
    callbacks, are delegated to the dispatcher: a callback is never executed
    in the same call stack as the ``then()`` who registered it.

    Resolving with a thenable (a Promise, or any object with a callable
    `then` attribute) adopts its outcome. Wrap a value in ``Value`` to skip
    this detection.

    Attributes:
        promise (Promise): the Promise associated to the Deferred.
        dispatcher (callable): scheduling function, shared with all the
            Deferred chained from this one.
    """

    PENDING = 'pending'
    RESOLUTION_IN_PROGRESS = 'resolution in progress'
    RESOLVED = 'resolved'
    REJECTED = 'rejected'

    def __init__(self, dispatcher=None, name=None):
        """
        Args:
            dispatcher (callable, optional): function accepting a closure,
                and executing it later. Default to the TaskQueue of the
                current thread.
            name (str, optional): if set, name used when converted to text.
        """
        if dispatcher is None:
            dispatcher = get_task_queue()
        self.dispatcher = dispatcher
        self.promise = Promise(self)

        self._name = name or '???'
        self._state = self.PENDING
        self._value = None
        self._error = None
        self._stack = []

        # Generation of the current thenable adoption. Each adoption takes a
        # new token; only the signals carrying the current token are used.
        self._adoption = 0

    @property
    def state(self):
        return self._state

    @property
    def value(self):
        """Resolution value; None until the Deferred is resolved."""
        return self._value

    @property
    def error(self):
        """Rejection reason; None until the Deferred is rejected."""
        return self._error

    def then(self, success_callback=None, error_callback=None):
        """Register callbacks called when the Deferred is settled.

        Args:
            success_callback (callable, optional): receives the value.
            error_callback (callable, optional): receives the error.
        Returns:
            Promise: new Promise settled with the outcome of the callback
                called. If no callback is callable, the Promise of this
                Deferred is returned as is.
        """
        if not callable(success_callback) and not callable(error_callback):
            return self.promise

        client = Client(Deferred(self.dispatcher), success_callback,
                        error_callback)

        if self._state in (self.PENDING, self.RESOLUTION_IN_PROGRESS):
            self._stack.append(client)
        elif self._state == self.RESOLVED:
            client.resolve(self._value, True)
        else:
            client.reject(self._error, True)

        return client.result.promise

    def resolve(self, value=None):
        """Resolve the Deferred, if it's still pending.

        Args:
            value: the result. A thenable is adopted: the Deferred will
                follow its outcome.
        Returns:
            Deferred: self
        """
        if self._state != self.PENDING:
            _logger.debug('Try to resolve %r already settled. New value will '
                          'be ignored: %r', self, value)
            return self
        return self._resolve(value)

    def reject(self, error=None):
        """Reject the Deferred, if it's still pending.

        Args:
            error: reason of the rejection, usually an Exception.
        Returns:
            Deferred: self
        """
        if self._state != self.PENDING:
            _logger.debug('Try to reject %r already settled. New error will '
                          'be ignored: %r', self, error)
            return self
        return self._reject(error)

    def _resolve(self, value):
        self._adoption += 1
        token = self._adoption

        if isinstance(value, Value):
            value = value.value
        elif value is self.promise:
            _logger.warning('%r resolved with its own promise', self)
            self._settle(self.REJECTED, RecursiveResolutionError(), True)
            return self
        else:
            try:
                if is_thenable(value):
                    self._state = self.RESOLUTION_IN_PROGRESS
                    value.then(partial(self._on_adopted_value, token),
                               partial(self._on_adopted_error, token))
                    return self
            except Exception as error:
                if token == self._adoption:
                    self._adoption += 1
                    self._reject(error)
                return self

        self._state = self.RESOLUTION_IN_PROGRESS
        self._dispatcher_call(self.RESOLVED, value)
        return self

    def _reject(self, error):
        self._state = self.RESOLUTION_IN_PROGRESS
        self._dispatcher_call(self.REJECTED, error)
        return self

    def _on_adopted_value(self, token, value):
        if token != self._adoption:
            return
        self._adoption += 1
        self._resolve(value)

    def _on_adopted_error(self, token, error):
        if token != self._adoption:
            return
        self._adoption += 1
        self._reject(error)

    def _dispatcher_call(self, state, payload):
        self.dispatcher(partial(self._settle, state, payload))

    def _settle(self, state, payload, defer=False):
        """Set the final state, then consume all the pending clients."""
        self._state = state
        if state == self.RESOLVED:
            self._value = payload
        else:
            self._error = payload

        clients, self._stack = self._stack, []
        for client in clients:
            if state == self.RESOLVED:
                client.resolve(payload, defer)
            else:
                client.reject(payload, defer)

    def __repr__(self):
        return 'Deferred(%s %s)' % (self._name, self._state)
