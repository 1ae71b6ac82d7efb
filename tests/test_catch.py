"""Tests for catch mode dispatch functions and the factory hooks."""

import pytest
from targets import Account, Vector

from object_proxy import CatchFactory, CatchWrapper, ValidationError, WrapError, wrap_catch


def record_into(log, result=None):
    """Return a dispatch function appending each call to `log`."""

    def method_call(name, args, kwargs):
        log.append((name, args, kwargs))
        return result

    return method_call


class TestCatchDispatch:
    def test_dispatch_function_receives_every_call(self, account, call_log):
        wrapper = wrap_catch(account, record_into(call_log, "caught"))
        assert isinstance(wrapper, CatchWrapper)
        assert wrapper.deposit(10, note="n") == "caught"
        assert wrapper.currency() == "caught"
        assert call_log == [("deposit", (10,), {"note": "n"}), ("currency", (), {})]
        assert account.balance == 100

    def test_without_dispatch_function_forwards(self, account):
        wrapper = wrap_catch(account)
        assert wrapper.deposit(10) == 110
        assert wrapper.method_call == wrapper._forward

    def test_dispatch_can_forward_selectively(self, account):
        wrapper = wrap_catch(account)

        def method_call(name, args, kwargs):
            if name == "withdraw":
                return "blocked"
            return getattr(account, name)(*args, **kwargs)

        wrapper.method_call = method_call
        assert wrapper.withdraw(10) == "blocked"
        assert wrapper.deposit(10) == 110

    def test_assigning_none_restores_forwarding(self, account, call_log):
        wrapper = wrap_catch(account, record_into(call_log))
        wrapper.method_call = None
        assert wrapper.deposit(1) == 101
        assert call_log == []

    def test_special_operations_are_caught(self, vector, call_log):
        wrapper = wrap_catch(vector, record_into(call_log, 7))
        assert len(wrapper) == 7
        assert wrapper + Vector(0, 0) == 7
        assert [entry[0] for entry in call_log] == ["__len__", "__add__"]

    def test_dispatch_exception_propagates(self, account):
        def method_call(name, args, kwargs):
            raise LookupError(name)

        wrapper = wrap_catch(account, method_call)
        with pytest.raises(LookupError, match="deposit"):
            wrapper.deposit(1)

    def test_non_callable_dispatch_function(self, account):
        wrapper = wrap_catch(account)
        with pytest.raises(ValidationError):
            wrapper.method_call = "nope"

    def test_attributes_are_not_caught(self, account, call_log):
        wrapper = wrap_catch(account, record_into(call_log))
        assert wrapper.balance == 100
        assert wrapper.wrapped is account
        assert call_log == []


class TestCatchFactory:
    def test_type_target_returns_factory(self):
        factory = wrap_catch(Account)
        assert isinstance(factory, CatchFactory)
        assert factory.default_method_call is None
        assert factory("ann", 1).deposit(1) == 2

    def test_factory_default(self, call_log):
        factory = wrap_catch(Account, record_into(call_log, "default"))
        assert factory().deposit(1) == "default"
        assert call_log == [("deposit", (1,), {})]

    def test_instance_override_wins_over_default(self, call_log):
        factory = wrap_catch(Account, record_into(call_log, "default"))
        wrapper = factory.wrap(Account(), method_call=lambda name, args, kwargs: "own")
        assert wrapper.deposit(1) == "own"
        assert call_log == []

    def test_default_read_at_construction(self):
        factory = wrap_catch(Account)
        before = factory()
        factory.method_call(lambda name, args, kwargs: "late")
        after = factory()
        assert before.deposit(1) == 1
        assert after.deposit(1) == "late"

    def test_method_call_is_a_decorator(self):
        factory = wrap_catch(Account)

        @factory.method_call
        def deny(name, args, kwargs):
            return None

        assert factory.default_method_call is deny
        assert factory().withdraw(10) is None

    def test_instance_created_hook(self):
        factory = wrap_catch(Account)
        created = []
        factory.instance_created(created.append)
        first = factory("a")
        second = factory.wrap(Account("b"))
        assert created == [first, second]
        assert [w.owner for w in created] == ["a", "b"]

    def test_instance_created_can_install_dispatch(self, call_log):
        factory = wrap_catch(Account)

        @factory.instance_created
        def install(wrapper):
            target = wrapper.wrapped

            def method_call(name, args, kwargs):
                call_log.append((target.owner, name))
                return getattr(target, name)(*args, **kwargs)

            wrapper.method_call = method_call

        assert factory("zed", 3).deposit(2) == 5
        assert call_log == [("zed", "deposit")]

    def test_hook_exception_propagates(self):
        factory = wrap_catch(Account)

        @factory.instance_created
        def refuse(wrapper):
            raise RuntimeError("no more accounts")

        with pytest.raises(RuntimeError):
            factory()

    def test_wrong_target_type(self, vector):
        factory = wrap_catch(Account)
        with pytest.raises(WrapError) as excinfo:
            factory.wrap(vector)
        assert excinfo.value.context["actual_type"] == "Vector"

    def test_reserved_method_call_name(self):
        class Dispatcher:
            def method_call(self):
                pass

        with pytest.raises(WrapError):
            wrap_catch(Dispatcher)


class FalsyDispatch:
    """Callable dispatch object that is falsy, like an empty container."""

    def __call__(self, name, args, kwargs):
        return "denied"

    def __bool__(self):
        return False


class TestCatchOverrides:
    def test_falsy_instance_override_is_used(self, call_log):
        factory = wrap_catch(Account, record_into(call_log, "default"))
        wrapper = factory.wrap(Account(), method_call=FalsyDispatch())
        assert wrapper.deposit(1) == "denied"
        assert call_log == []

    def test_falsy_factory_default_is_used(self):
        factory = wrap_catch(Account, FalsyDispatch())
        assert factory().deposit(1) == "denied"
