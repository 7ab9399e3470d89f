# -*- coding: utf-8 -*-

from .deferred import Deferred
from .dispatch import LoopDispatcher, TaskQueue, dispatch_now, get_task_queue
from .errors import RecursiveResolutionError, RejectionError, TimeoutError
from .promise import Promise
from .reduce_coroutine import reduce_coroutine
from .thread_pool import ThreadPoolExecutor
from .util import Value, is_thenable

__all__ = ['Deferred', 'LoopDispatcher', 'TaskQueue', 'dispatch_now',
           'get_task_queue', 'RecursiveResolutionError', 'RejectionError',
           'TimeoutError', 'Promise', 'reduce_coroutine',
           'ThreadPoolExecutor', 'Value', 'is_thenable']
