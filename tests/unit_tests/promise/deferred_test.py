# -*- coding: utf-8 -*-

from functools import partial

import pytest

from kurve.promise import (Deferred, Promise, RecursiveResolutionError,
                           RejectionError, TaskQueue, Value, dispatch_now)
from kurve.promise.client import Client


class TestDeferredResolution(object):

    def setup_method(self, method):
        self.queue = TaskQueue()

    def test_deferred_resolve_promise(self):
        df = Deferred(self.queue)
        assert isinstance(df.promise, Promise)
        assert df.state == Deferred.PENDING

        df.resolve('Value')
        assert df.state == Deferred.RESOLUTION_IN_PROGRESS
        assert df.value is None

        self.queue.run()
        assert df.state == Deferred.RESOLVED
        assert df.value == 'Value'

    def test_deferred_reject_promise(self):
        class MyException(Exception):
            pass

        df = Deferred(self.queue)
        error = MyException()
        df.reject(error)
        assert df.state == Deferred.RESOLUTION_IN_PROGRESS

        self.queue.run()
        assert df.state == Deferred.REJECTED
        assert df.error is error

        with pytest.raises(MyException):
            self.queue.run_until_settled(df.promise, 0.1)

    def test_resolve_returns_the_deferred(self):
        df = Deferred(self.queue)
        assert df.resolve(1) is df
        assert df.reject(ValueError()) is df

    def test_resolve_then_double_value(self):
        df = Deferred(self.queue)
        df.resolve(5)
        p = df.then(lambda v: v * 2)
        assert self.queue.run_until_settled(p, 0.1) == 10

    def test_reject_then_recover_with_length(self):
        df = Deferred(self.queue)
        df.reject('boom')
        p = df.then(None, lambda e: len(e))
        assert self.queue.run_until_settled(p, 0.1) == 4

    def test_second_resolve_is_ignored(self):
        df = Deferred(self.queue)
        df.resolve(1)
        df.resolve(2)
        self.queue.run()
        df.resolve(3)
        self.queue.run()
        assert df.value == 1
        assert df.state == Deferred.RESOLVED

    def test_reject_after_resolve_is_ignored(self):
        df = Deferred(self.queue)
        df.resolve(1)
        df.reject(ValueError())
        self.queue.run()
        assert df.state == Deferred.RESOLVED
        assert df.error is None

    def test_resolve_after_reject_is_ignored(self):
        df = Deferred(self.queue)
        error = ValueError()
        df.reject(error)
        self.queue.run()
        df.resolve(1)
        self.queue.run()
        assert df.state == Deferred.REJECTED
        assert df.error is error
        assert df.value is None

    def test_resolve_with_own_promise(self):
        df = Deferred(self.queue)
        df.resolve(df.promise)

        # No need to run the queue.
        assert df.state == Deferred.REJECTED
        assert isinstance(df.error, RecursiveResolutionError)
        assert isinstance(df.error, TypeError)
        assert len(self.queue) == 0

    def test_resolve_with_own_promise_notifies_clients(self):
        df = Deferred(self.queue)
        errors = []
        df.promise.fail(errors.append)

        df.resolve(df.promise)
        assert errors == []  # callbacks are still dispatched.

        self.queue.run()
        assert len(errors) == 1
        assert isinstance(errors[0], RecursiveResolutionError)

    def test_resolve_with_value_wrapper(self):
        class FakeThenable(object):
            def then(self, on_success, on_error):
                raise AssertionError('This should never be called!')

        obj = FakeThenable()
        df = Deferred(self.queue)
        df.resolve(Value(obj))
        self.queue.run()
        assert df.value is obj

    def test_resolve_with_none(self):
        df = Deferred(self.queue)
        df.resolve()
        self.queue.run()
        assert df.state == Deferred.RESOLVED
        assert df.value is None


class TestThenableAdoption(object):

    def setup_method(self, method):
        self.queue = TaskQueue()

    def test_adopt_promise_resolved_later(self):
        inner = Deferred(self.queue)
        df = Deferred(self.queue)
        df.resolve(inner.promise)
        assert df.state == Deferred.RESOLUTION_IN_PROGRESS

        self.queue.run()
        assert df.state == Deferred.RESOLUTION_IN_PROGRESS

        inner.resolve(7)
        assert self.queue.run_until_settled(df.promise, 0.1) == 7
        assert df.value == 7

    def test_adopt_rejected_promise(self):
        class MyException(Exception):
            pass

        inner = Deferred(self.queue)
        df = Deferred(self.queue)
        df.resolve(inner.promise)
        inner.reject(MyException())

        with pytest.raises(MyException):
            self.queue.run_until_settled(df.promise, 0.1)
        assert df.state == Deferred.REJECTED

    def test_adopt_nested_promises(self):
        inner = Deferred(self.queue)
        middle = Deferred(self.queue)
        df = Deferred(self.queue)
        df.resolve(middle.promise)
        middle.resolve(inner.promise)
        inner.resolve('deep')
        assert self.queue.run_until_settled(df.promise, 0.1) == 'deep'

    def test_adopt_foreign_thenable(self):
        callbacks = []

        class ForeignThenable(object):
            def then(self, on_success, on_error):
                callbacks.append((on_success, on_error))

        df = Deferred(self.queue)
        df.resolve(ForeignThenable())
        assert len(callbacks) == 1

        callbacks[0][0]('foreign')
        assert self.queue.run_until_settled(df.promise, 0.1) == 'foreign'

    def test_adoption_honors_only_first_signal(self):
        class BadThenable(object):
            def then(self, on_success, on_error):
                on_success('first')
                on_error(ValueError())
                on_success('second')

        df = Deferred(self.queue)
        df.resolve(BadThenable())
        self.queue.run()
        assert df.state == Deferred.RESOLVED
        assert df.value == 'first'

    def test_adoption_ignore_late_signals(self):
        callbacks = []

        class LateThenable(object):
            def then(self, on_success, on_error):
                callbacks.append((on_success, on_error))

        df = Deferred(self.queue)
        df.resolve(LateThenable())
        on_success, on_error = callbacks[0]
        on_error('failure')
        on_success('too late')
        self.queue.run()
        assert df.state == Deferred.REJECTED
        assert df.error == 'failure'

    def test_adoption_thenable_raising_before_signal(self):
        class MyException(Exception):
            pass

        class RaisingThenable(object):
            def then(self, on_success, on_error):
                raise MyException()

        df = Deferred(self.queue)
        df.resolve(RaisingThenable())
        with pytest.raises(MyException):
            self.queue.run_until_settled(df.promise, 0.1)

    def test_adoption_thenable_raising_after_signal(self):
        class RaisingThenable(object):
            def then(self, on_success, on_error):
                on_success('OK')
                raise ValueError()

        df = Deferred(self.queue)
        df.resolve(RaisingThenable())
        assert self.queue.run_until_settled(df.promise, 0.1) == 'OK'

    def test_adoption_with_raising_then_attribute(self):
        class MyException(Exception):
            pass

        class BrokenObject(object):
            @property
            def then(self):
                raise MyException()

        df = Deferred(self.queue)
        df.resolve(BrokenObject())
        with pytest.raises(MyException):
            self.queue.run_until_settled(df.promise, 0.1)

    def test_non_callable_then_attribute_is_a_value(self):
        class Data(object):
            then = 'not a method'

        data = Data()
        df = Deferred(self.queue)
        df.resolve(data)
        assert self.queue.run_until_settled(df.promise, 0.1) is data

    def test_then_during_adoption_is_queued(self):
        inner = Deferred(self.queue)
        df = Deferred(self.queue)
        df.resolve(inner.promise)

        results = []
        df.then(results.append)
        self.queue.run()
        assert results == []

        inner.resolve('value')
        self.queue.run()
        assert results == ['value']


class TestThenOrdering(object):

    def setup_method(self, method):
        self.queue = TaskQueue()

    def test_then_without_callback_returns_same_promise(self):
        df = Deferred(self.queue)
        assert df.then() is df.promise
        assert df.promise.then() is df.promise
        assert df.promise.then('not callable', 42) is df.promise
        assert df.promise.fail() is df.promise

    def test_then_returns_new_promise(self):
        df = Deferred(self.queue)
        p1 = df.promise.then(lambda v: v)
        p2 = df.promise.then(lambda v: v)
        assert p1 is not df.promise
        assert p1 is not p2

    def test_callback_is_never_synchronous_on_resolved_deferred(self):
        df = Deferred(self.queue)
        df.resolve('done')
        self.queue.run()

        calls = []
        df.promise.then(calls.append)
        assert calls == []

        self.queue.run()
        assert calls == ['done']

    def test_callback_is_never_synchronous_on_rejected_deferred(self):
        df = Deferred(self.queue)
        df.reject('error')
        self.queue.run()

        calls = []
        df.promise.fail(calls.append)
        assert calls == []

        self.queue.run()
        assert calls == ['error']

    def test_callback_is_not_called_by_resolve(self):
        df = Deferred(self.queue)
        calls = []
        df.promise.then(calls.append)
        df.resolve(1)
        assert calls == []
        self.queue.run()
        assert calls == [1]

    def test_continuations_fire_in_attachment_order(self):
        df = Deferred(self.queue)
        order = []

        def callback(index, value):
            order.append(index)

        for i in range(10):
            df.promise.then(partial(callback, i))

        df.resolve(None)
        self.queue.run()
        assert order == list(range(10))

    def test_continuations_fire_in_the_settlement_turn(self):
        df = Deferred(self.queue)
        calls = []
        df.promise.then(calls.append)
        df.promise.then(calls.append)
        df.resolve('v')

        # The settlement is one task; it calls all the queued callbacks.
        assert len(self.queue) == 1
        self.queue._pop()()
        assert calls == ['v', 'v']

    def test_late_continuation_one_hop_later(self):
        df = Deferred(self.queue)
        df.resolve('v')
        self.queue.run()

        calls = []
        df.promise.then(calls.append)
        assert len(self.queue) == 1
        self.queue._pop()()
        assert calls == ['v']

    def test_passthrough_of_value(self):
        df = Deferred(self.queue)
        p = df.promise.fail(lambda e: 'never').then(lambda v: v + 1)
        df.resolve(1)
        assert self.queue.run_until_settled(p, 0.1) == 2

    def test_passthrough_of_error(self):
        class MyException(Exception):
            pass

        df = Deferred(self.queue)
        p = df.promise.then(lambda v: 'never').then(lambda v: 'never again')
        df.reject(MyException())
        with pytest.raises(MyException):
            self.queue.run_until_settled(p, 0.1)

    def test_error_callback_recovers(self):
        df = Deferred(self.queue)
        p = df.promise.fail(lambda e: 'recovered')
        df.reject(ValueError())
        assert self.queue.run_until_settled(p, 0.1) == 'recovered'

    def test_callback_raising_rejects_downstream(self):
        class MyException(Exception):
            pass

        def callback(value):
            raise MyException()

        df = Deferred(self.queue)
        p = df.promise.then(callback)
        df.resolve(1)
        with pytest.raises(MyException):
            self.queue.run_until_settled(p, 0.1)

    def test_error_callback_raising_rejects_downstream(self):
        class MyException(Exception):
            pass

        def on_error(error):
            raise MyException()

        df = Deferred(self.queue)
        p = df.promise.fail(on_error)
        df.reject(ValueError())
        with pytest.raises(MyException):
            self.queue.run_until_settled(p, 0.1)

    def test_callback_returning_promise(self):
        other = Deferred(self.queue)
        df = Deferred(self.queue)
        p = df.promise.then(lambda v: other.promise)
        df.resolve(1)
        self.queue.run()
        other.resolve('other value')
        assert self.queue.run_until_settled(p, 0.1) == 'other value'

    def test_non_exception_rejection(self):
        df = Deferred(self.queue)
        df.reject({'code': 42})
        with pytest.raises(RejectionError) as exc_info:
            self.queue.run_until_settled(df.promise, 0.1)
        assert exc_info.value.reason == {'code': 42}

    def test_independent_consumers(self):
        df = Deferred(self.queue)
        p1 = df.promise.then(lambda v: v + 1)
        p2 = df.promise.then(lambda v: v * 10)
        df.resolve(4)
        assert self.queue.run_until_settled(p1, 0.1) == 5
        assert self.queue.run_until_settled(p2, 0.1) == 40


class TestDispatcher(object):

    def test_chain_shares_the_dispatcher(self):
        closures = []

        def dispatcher(closure):
            closures.append(closure)

        df = Deferred(dispatcher)
        calls = []
        df.promise.then(lambda v: v * 2).then(calls.append)
        df.resolve(21)

        while closures:
            closures.pop(0)()
        assert calls == [42]

    def test_synchronous_dispatcher(self):
        df = Deferred(dispatch_now)
        calls = []
        df.promise.then(lambda v: v + 1).then(calls.append)
        df.resolve(1)
        assert calls == [2]
        assert df.state == Deferred.RESOLVED


class TestClient(object):

    def setup_method(self, method):
        self.queue = TaskQueue()

    def test_client_without_callback_forwards_value(self):
        client = Client(Deferred(self.queue))
        client.resolve('value', False)
        self.queue.run()
        assert client.result.value == 'value'

    def test_client_without_callback_forwards_error(self):
        client = Client(Deferred(self.queue))
        client.reject('error', True)
        self.queue.run()
        assert client.result.error == 'error'

    def test_client_deferred_call(self):
        calls = []
        client = Client(Deferred(self.queue), calls.append)
        client.resolve('value', True)
        assert calls == []
        self.queue.run()
        assert calls == ['value']

    def test_client_immediate_call(self):
        calls = []
        client = Client(Deferred(self.queue), None, calls.append)
        client.reject('error', False)
        assert calls == ['error']
        self.queue.run()
        assert client.result.state == Deferred.RESOLVED
