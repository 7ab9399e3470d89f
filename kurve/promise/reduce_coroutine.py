# -*- coding: utf-8 -*-

from functools import wraps

from .deferred import Deferred
from .errors import RejectionError
from .promise import Promise
from .util import is_thenable


def reduce_coroutine(safeguard=False, dispatcher=None):
    """Decorator who converts a coroutine of promises into a single promise.

    The greatest interest is the ability to write a function in an
    synchronous-like style, using many asynchronous Promises.
    Whatever is the number of Promises or async calls used, the result will
    always be an unique Promise wrapping the whole process.

    Each yielded thenable is waited; its value is sent back into the
    generator (or its error is thrown into it). The first non-thenable value
    yielded is the result; a `return` statement sets it too.

    Args:
        safeguard (boolean): if true, use `Promise.safeguard()` on the
            resulting promise.
        dispatcher (callable, optional): dispatcher of the resulting promise.
            Default to the TaskQueue of the calling thread.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            """
            Args:
                *args
                **kwargs
            Returns:
                Promise<*>
            """
            df = Deferred(dispatcher, name='COROUTINE %s' % func.__name__)
            if safeguard:
                df.promise.safeguard()

            try:
                # Create generator; Initialization phase
                gen = func(*args, **kwargs)
            except Exception as error:
                df.reject(error)
                return df.promise

            def _call_next_or_set_result(value):
                if is_thenable(value):
                    Promise.resolve(value, df.dispatcher).then(iter_next,
                                                               iter_error)
                else:
                    gen.close()
                    df.resolve(value)

            def iter_next(yielded_value):
                try:
                    next_value = gen.send(yielded_value)
                except StopIteration as stop:
                    if stop.value is not None:
                        df.resolve(stop.value)
                    else:
                        df.resolve(yielded_value)
                    return
                except Exception as error:
                    df.reject(error)
                    return
                _call_next_or_set_result(next_value)

            def iter_error(raised_error):
                if not isinstance(raised_error, BaseException):
                    raised_error = RejectionError(raised_error)
                try:
                    next_value = gen.throw(raised_error)
                except StopIteration as stop:
                    # The error has been caught by the generator.
                    df.resolve(stop.value)
                    return
                except Exception as error:
                    df.reject(error)
                    return
                _call_next_or_set_result(next_value)

            # Start and resolve loop.
            try:
                f = next(gen)
            except StopIteration as stop:
                df.resolve(stop.value)
                return df.promise
            except Exception as error:
                df.reject(error)
                return df.promise
            _call_next_or_set_result(f)

            return df.promise

        return wrapper
    return decorator
