# -*- coding: utf-8 -*-

from concurrent.futures import ThreadPoolExecutor as Executor
from functools import partial
import logging

from .deferred import Deferred
from .util import Value

_logger = logging.getLogger(__name__)


class ThreadPoolExecutor(object):
    """Execute blocking callables in other threads, on demand.

    The callable runs in a worker thread, but the Promise returned is always
    settled through its dispatcher: callbacks chained to it are executed by
    the thread who owns the dispatcher, never by the worker thread.
    """

    def __init__(self, max_workers, dispatcher=None):
        """Initialize the thread pool

        Args:
            max_workers: The maximum number of threads that can be used to
                execute the given calls.
            dispatcher (callable, optional): dispatcher of the promises
                returned by `submit()`. Default to the TaskQueue of the
                thread who calls `submit()`.
        """
        self._executor = Executor(max_workers)
        self._dispatcher = dispatcher

    def submit(self, callback, *args, **kwargs):
        """Schedule the callable to be executed and return a Promise.

        Args:
            callback (callable): callback who will run in another thread.
            *args: argument passed to callback.
            **kwargs: keywords arguments passed to callback.
        Returns:
            Promise: Promise who resolve after the callback has been executed.
                It's resolved with the value returned by the callback.
                If the callback raise an exception, the promise is rejected
                with this exception.
        """
        df = Deferred(self._dispatcher,
                      name=getattr(callback, '__name__', None))

        def on_future_done(f):
            try:
                result = f.result()
            except BaseException as error:
                df.dispatcher(partial(df.reject, error))
                return
            df.dispatcher(partial(df.resolve, Value(result)))

        f = self._executor.submit(callback, *args, **kwargs)
        f.add_done_callback(on_future_done)

        return df.promise

    def shutdown(self, wait=True):
        _logger.debug('Shutdown thread pool (wait=%s)', wait)
        self._executor.shutdown(wait)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
