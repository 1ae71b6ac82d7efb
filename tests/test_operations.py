"""Tests for operation set discovery and dispatch stub construction."""

import pytest
from targets import Account, Counter, Vector

from object_proxy import (
    EXCLUDED_OPERATIONS,
    INPLACE_OPERATIONS,
    SPECIAL_OPERATIONS,
    ReservedNameError,
    ValidationError,
    discover_operations,
)
from object_proxy.operations import check_reserved, lookup_attribute, make_operation


class TestDiscoverOperations:
    """Tests for discover_operations."""

    def test_public_routines_and_defined_specials(self):
        """Test that methods, static/class methods and own specials are found."""
        assert discover_operations(Account) == (
            "__contains__",
            "__len__",
            "currency",
            "deposit",
            "open",
            "withdraw",
        )

    def test_properties_are_not_operations(self):
        assert "is_empty" not in discover_operations(Account)

    def test_specials_inherited_from_object_are_skipped(self):
        """Account does not define __eq__ or __str__, so they are not intercepted."""
        operations = discover_operations(Account)
        assert "__eq__" not in operations
        assert "__str__" not in operations

    def test_specials_defined_by_type(self):
        operations = discover_operations(Vector)
        for name in ("__add__", "__eq__", "__len__", "__iter__", "__getitem__", "__str__"):
            assert name in operations
        assert "norm2" in operations

    def test_exclusion_list_never_discovered(self):
        """Identity and raw-dispatch primitives are excluded even when defined."""

        class Noisy:
            def __hash__(self):
                return 1

            def __getattribute__(self, name):
                return object.__getattribute__(self, name)

            def __setattr__(self, name, value):
                object.__setattr__(self, name, value)

            def ping(self):
                return "pong"

        operations = discover_operations(Noisy)
        assert operations == ("ping",)
        assert not set(operations) & EXCLUDED_OPERATIONS

    def test_omit(self):
        operations = discover_operations(Account, omit=["withdraw", "__len__"])
        assert "withdraw" not in operations
        assert "__len__" not in operations
        assert "deposit" in operations

    def test_include_special_false(self):
        assert discover_operations(Vector, include_special=False) == ("norm2",)

    def test_inherited_operations(self):
        class Savings(Account):
            def interest(self):
                return self.balance // 10

        operations = discover_operations(Savings)
        assert "interest" in operations
        assert "deposit" in operations

    def test_builtin_type(self):
        operations = discover_operations(list)
        assert "append" in operations
        assert "__len__" in operations
        assert "__getitem__" in operations
        assert "__init__" not in operations
        assert "__hash__" not in operations

    def test_empty_operation_set(self):
        class Empty:
            pass

        assert discover_operations(Empty) == ()

    def test_inplace_reflected_and_conversion_operators(self):
        assert discover_operations(Counter) == (
            "__format__",
            "__iadd__",
            "__index__",
            "__rsub__",
            "__rtruediv__",
        )

    def test_operator_table_groups(self):
        assert INPLACE_OPERATIONS <= SPECIAL_OPERATIONS
        for name in ("__ior__", "__rpow__", "__rdivmod__", "__bytes__", "__aenter__"):
            assert name in SPECIAL_OPERATIONS

    def test_metaclass_call_is_not_an_operation(self):
        """`type.__call__` reachable from the class must not leak in."""
        assert "__call__" not in discover_operations(Account)


class TestCheckReserved:
    """Tests for check_reserved."""

    def test_no_collision(self):
        check_reserved(Account, ("deposit",), frozenset({"wrapped"}))

    def test_collision_raises_with_suggestions(self):
        with pytest.raises(ReservedNameError) as excinfo:
            check_reserved(Account, ("wrapped", "deposit"), frozenset({"wrapped"}))
        assert isinstance(excinfo.value, ValidationError)
        assert "wrapped" in str(excinfo.value)
        assert any("omit" in s for s in excinfo.value.suggestions)


class TestMakeOperation:
    """Tests for make_operation."""

    def test_copies_metadata(self):
        operation = make_operation(Account, "deposit")
        assert operation.__name__ == "deposit"
        assert operation.__doc__ == Account.deposit.__doc__
        assert operation.__wrapped__ is Account.deposit

    def test_unwraps_static_and_class_methods(self):
        assert make_operation(Account, "currency").__wrapped__ is Account.currency
        assert make_operation(Account, "open").__wrapped__ is Account.open.__func__

    def test_body_routes_to_dispatch(self):
        operation = make_operation(Account, "deposit")

        class Stub:
            def _dispatch(self, name, args, kwargs):
                return name, args, kwargs

        assert operation(Stub(), 5, note="x") == ("deposit", (5,), {"note": "x"})

    def test_lookup_ignores_metaclass(self):
        owner, attr = lookup_attribute(Account, "deposit")
        assert owner is Account
        with pytest.raises(AttributeError):
            lookup_attribute(Account, "mro")

    def test_inplace_body_returns_wrapper_for_self_update(self):
        operation = make_operation(Counter, "__iadd__")

        class Stub:
            def __init__(self, result):
                self._wrapped = "target"
                self.result = result

            def _dispatch(self, name, args, kwargs):
                return self._wrapped if self.result is None else self.result

        updated = Stub(None)
        assert operation(updated, 1) is updated
        assert operation(Stub("other"), 1) == "other"
