# -*- coding: utf-8 -*-

from functools import partial
import logging

_logger = logging.getLogger(__name__)


class Promise(object):
    """It represents an operation expected to be completed in the future.

    A Promise is the read-only view of a Deferred. It contains a value not yet
    known when the Promise is created. It allows to set callbacks who will be
    called as soon as the result is known. It's a "promise" of a future value.

    The Promise has no state of its own: it can be shared between any number
    of consumers; each call to ``then()`` creates an independent chain.
    """

    def __init__(self, deferred):
        self._deferred = deferred

    def then(self, success_callback=None, error_callback=None):
        """Create a new promise from callbacks called when this one is settled.

        If the promise is resolved, the `success_callback` callback will be
        called. Otherwise (the promise has been rejected), the
        `error_callback` callback is called.
        In any case, the callback will define the state of the returned
        Promise. If the callback raises an exception, the new Promise is
        rejected. The callback can returns:
        - A value: the new promise will be resolved with this value.
        - Another Promise, or any object with a `then` method: when resolved
            or rejected, will transfer its status (state and result/error) to
            the Promise returned by this method.

        If a callback is not defined, the state of the "self" promise is
        transferred at the new promise (the state and the value/error).
        The callbacks are never called before ``then()`` returns.

        Args:
            success_callback (callable, optional): This callback will receive
                the result of the original promise as argument.
            error_callback (callable, optional): This callback will receive
                the rejection reason of the original promise as argument.
        Returns:
            Promise<*>: new promise depending of self. If no callback is set,
                `self` is returned.
        """
        return self._deferred.then(success_callback, error_callback)

    def fail(self, error_callback=None):
        """Create a new promise with a callback called when an error occurs.

        Alias of `self.then(None, error_callback)`

        Returns:
            Promise<*>: new Promise chained to `self`. If `self` is resolved,
                the promised value will be the same as `self`. Otherwise, the
                value returned by the `error_callback()` callback.
        """
        return self._deferred.then(None, error_callback)

    def safeguard(self):
        """Catch all errors and log them with the most details possible.

        This method is aimed to protect the program from uncaught rejected
        Promise. If no error handler has been set (via then() or fail()), the
        default behavior is to do nothing, and thus, errors are silently
        ignored.
        Calling `safeguard()` after all chains are set will catch these errors,
        and log them as ERROR.
        """
        def guard(error):
            if isinstance(error, BaseException):
                _logger.error('[SAFEGUARD] %s', self,
                              exc_info=(type(error), error,
                                        error.__traceback__))
            else:
                _logger.error('[SAFEGUARD] %s: %r', self, error)

        self._deferred.then(None, guard)

    def __repr__(self):
        return 'Promise(%r)' % self._deferred

    @classmethod
    def resolve(cls, value, dispatcher=None):
        """Create a promise who resolves the selected value.

        Args:
            value: result of the promise. If it's a Promise, it's returned as
                is. Other thenables are adopted.
            dispatcher (callable, optional): dispatcher of the new Promise.
        Returns:
            Promise: new Promise resolved with the value passed in parameter.
        """
        from .deferred import Deferred

        if isinstance(value, Promise):
            return value
        return Deferred(dispatcher, name='RESOLVE').resolve(value).promise

    @classmethod
    def reject(cls, reason, dispatcher=None):
        """Create a Promise rejected for the reason specified.

        Args:
            reason: Exception set to the Promise
            dispatcher (callable, optional): dispatcher of the new Promise.
        Returns:
            Promise: new Promise rejected.
        """
        from .deferred import Deferred

        return Deferred(dispatcher, name='REJECT').reject(reason).promise

    @classmethod
    def all(cls, promises, dispatcher=None):
        """Create a Promise who wait a list of promises to be all resolved.

        The resulting Promise resolve when all of the promises in the list are
        resolved, and returns a list of all the resulting values, keeping the
        order of the promise list.
        If a promise is rejected, then the resulting promise is rejected with
        the same reason, and all results from other promises are ignored.

        Args:
            promises (list of Promise): non-thenable items are used as
                values.
            dispatcher (callable, optional): dispatcher of the new Promise.
        Returns:
            Promise<list>: resulting promise, resolved when all promises
                are resolved, or rejected when one of the promises has been
                rejected.
        """
        from .deferred import Deferred

        promises = list(promises)
        df = Deferred(dispatcher, name='ALL')
        if not promises:
            return df.resolve([]).promise

        results = [None] * len(promises)
        remaining = [len(promises)]

        def resolve_one_promise(index, value):
            results[index] = value
            remaining[0] -= 1
            if remaining[0] == 0:
                df.resolve(results)

        def reject_one_promise(reason):
            df.reject(reason)

        for index, p in enumerate(promises):
            cls.resolve(p, df.dispatcher).then(
                partial(resolve_one_promise, index), reject_one_promise)

        return df.promise

    @classmethod
    def race(cls, promises, dispatcher=None):
        """Resolve or reject with the fastest Promise.

        The resulting Promise will be settled as soon as the one the promises
        is settled. Result value or rejection reason of the finished promise
        are transmitted. All other Promise result's will be ignored.

        Args:
            promises (list): list of promises.
            dispatcher (callable, optional): dispatcher of the new Promise.
        Returns:
            Promise: a promise
        Raises:
            ValueError: If the promise list is empty.
        """
        from .deferred import Deferred

        promises = list(promises)
        if not promises:
            raise ValueError('Empty promise list in Promise.race()')

        df = Deferred(dispatcher, name='RACE')

        def resolve_once(result):
            df.resolve(result)

        def reject_once(reason):
            df.reject(reason)

        for p in promises:
            cls.resolve(p, df.dispatcher).then(resolve_once, reject_once)

        return df.promise
