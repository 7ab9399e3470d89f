# -*- coding: utf-8 -*-
"""Dispatchers: the scheduling policies used by the Deferred objects.

A dispatcher is any callable who accepts a zero-argument closure and arranges
for it to run later, after the current synchronous execution is done.

The default dispatcher is the ``TaskQueue`` of the current thread. Nothing
runs until the owner of the thread pumps the queue, using ``run()`` or
``run_until_settled()``:

    >>> queue = get_task_queue()
    >>> df = Deferred()
    >>> p = df.promise.then(lambda v: v * 2)
    >>> _ = df.resolve(21)
    >>> queue.run_until_settled(p)
    42
"""

from collections import deque
import logging
import threading
import time

from .errors import RejectionError, TimeoutError

_logger = logging.getLogger(__name__)

_local = threading.local()


class TaskQueue(object):
    """FIFO queue of closures, executed one after another.

    Closures can be submitted from any thread; they are always executed by
    the thread who calls ``run()`` or ``run_until_settled()``.
    """

    def __init__(self):
        self._tasks = deque()
        self._condition = threading.Condition()

    def __call__(self, closure):
        with self._condition:
            self._tasks.append(closure)
            self._condition.notify_all()

    def __len__(self):
        with self._condition:
            return len(self._tasks)

    def _pop(self, timeout=0):
        """Take the next closure, waiting at most `timeout` seconds.

        Returns:
            callable: the next closure, or None if the queue stays empty.
        """
        with self._condition:
            if not self._tasks and timeout != 0:
                self._condition.wait(timeout)
            if self._tasks:
                return self._tasks.popleft()
        return None

    @staticmethod
    def _execute(closure):
        try:
            closure()
        except Exception:
            _logger.exception('Dispatched task %r has raised an exception!',
                              closure)

    def run(self):
        """Execute the closures until the queue is empty.

        Closures scheduled while running are executed too.

        Returns:
            int: number of closures executed.
        """
        count = 0
        closure = self._pop()
        while closure is not None:
            self._execute(closure)
            count += 1
            closure = self._pop()
        return count

    def run_until_settled(self, promise, timeout=None):
        """Execute the closures until the promise is settled.

        When the queue is empty, the call waits for closures submitted by
        other threads (thread pools).

        Args:
            promise (Promise): promise whose outcome is expected. Its
                callbacks must be dispatched on this queue.
            timeout (float, optional): maximum delay, in seconds. By default,
                it can wait indefinitely.
        Returns:
            *: the value of the promise.
        Raises:
            TimeoutError: if the promise is not settled within the delay.
            RejectionError: if the promise is rejected by a non-exception.
            *: If the promise is rejected, the rejection cause is raised.
        """
        outcome = []

        promise.then(lambda value: outcome.append((True, value)),
                     lambda error: outcome.append((False, error)))

        deadline = None if timeout is None else time.time() + timeout
        while not outcome:
            if deadline is None:
                wait = None
            else:
                wait = deadline - time.time()
                if wait <= 0:
                    raise TimeoutError()
            closure = self._pop(wait)
            if closure is not None:
                self._execute(closure)

        success, result = outcome[0]
        if success:
            return result
        if isinstance(result, BaseException):
            raise result
        raise RejectionError(result)


def get_task_queue():
    """Returns the TaskQueue of the current thread.

    Each thread has its own queue, created at first use.
    """
    queue = getattr(_local, 'queue', None)
    if queue is None:
        queue = TaskQueue()
        _local.queue = queue
    return queue


def dispatch_now(closure):
    """Synchronous dispatcher: executes the closure immediately."""
    closure()


class LoopDispatcher(object):
    """Dispatch the closures on an asyncio event loop."""

    def __init__(self, loop):
        self._loop = loop

    def __call__(self, closure):
        self._loop.call_soon_threadsafe(closure)
