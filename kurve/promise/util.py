# -*- coding: utf-8 -*-


class Value(object):
    """Explicit marker of a plain resolution value.

    A value wrapped in ``Value`` is never inspected for a ``then`` member:
    ``deferred.resolve(Value(obj))`` resolves with ``obj`` itself, even if
    ``obj`` looks like a thenable.
    """

    __slots__ = ('value',)

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return 'Value(%r)' % (self.value,)


def is_thenable(value):
    """Check if an object can be chained, like a Promise, or is a "result".

    The promise module uses this function to differentiate "chainable" objects
    and direct return values, when using a callback who can returns both.

    Note that the attribute lookup may raise (a property, a __getattr__ ...);
    the error is not caught here.

    Returns:
        boolean: True if the value has an attribute 'then' who is callable.
            False if not.
    """
    if value is None or isinstance(value, Value):
        return False
    return callable(getattr(value, 'then', None))
