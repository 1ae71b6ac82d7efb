r"""Operation set discovery and dispatch stub construction.

The operation set of a target type is the list of names a wrapper
intercepts. It is computed once, when the wrapper type is synthesized:

  - public names (no leading underscore) bound to a routine on the type,
  - special operator/protocol methods from `SPECIAL_OPERATIONS` that the
    type defines or inherits from something other than `object`,
  - minus `EXCLUDED_OPERATIONS` and the caller's omit list.

Properties and data attributes are not operations.

\dot
digraph Operations {
    rankdir=LR;
    node [shape=rectangle];
    "target type" -> "discover_operations" -> "make_operation" -> "wrapper type";
}
\enddot
"""

from __future__ import annotations

import functools
import logging
import types
from typing import Any, Callable, Collection, FrozenSet, Iterable, Tuple

from .utils import ReservedNameError, get_type_name

logger = logging.getLogger(__name__)

__all__ = [
    "SPECIAL_OPERATIONS",
    "INPLACE_OPERATIONS",
    "EXCLUDED_OPERATIONS",
    "discover_operations",
    "check_reserved",
    "make_operation",
    "lookup_attribute",
]


# -----------------------------------------------------------------------------
# Name Tables
# -----------------------------------------------------------------------------

_BINARY_OPERATORS = [
    "add",
    "sub",
    "mul",
    "matmul",
    "truediv",
    "floordiv",
    "mod",
    "pow",
    "lshift",
    "rshift",
    "and",
    "or",
    "xor",
]

INPLACE_OPERATIONS: FrozenSet[str] = frozenset(
    f"__i{op}__" for op in _BINARY_OPERATORS
)
"""In-place operators; a wrapper stays bound when the target updates itself."""

SPECIAL_OPERATIONS: FrozenSet[str] = frozenset(
    [f"__{op}__" for op in _BINARY_OPERATORS + ["divmod"]]
    + [f"__r{op}__" for op in _BINARY_OPERATORS + ["divmod"]]
    + [
        "__lt__",
        "__le__",
        "__eq__",
        "__ne__",
        "__gt__",
        "__ge__",
        "__round__",
        "__floor__",
        "__ceil__",
        "__trunc__",
        "__int__",
        "__float__",
        "__complex__",
        "__index__",
        "__neg__",
        "__pos__",
        "__abs__",
        "__invert__",
        "__call__",
        "__getitem__",
        "__setitem__",
        "__delitem__",
        "__len__",
        "__length_hint__",
        "__iter__",
        "__next__",
        "__reversed__",
        "__contains__",
        "__bool__",
        "__str__",
        "__bytes__",
        "__format__",
        "__enter__",
        "__exit__",
        "__await__",
        "__aiter__",
        "__anext__",
        "__aenter__",
        "__aexit__",
    ]
) | INPLACE_OPERATIONS
"""Operator and protocol methods a wrapper may intercept."""

EXCLUDED_OPERATIONS: FrozenSet[str] = frozenset(
    [
        "__hash__",
        "__getattribute__",
        "__getattr__",
        "__setattr__",
        "__delattr__",
        "__class__",
        "__init__",
        "__new__",
        "__dir__",
        "__init_subclass__",
        "__subclasshook__",
    ]
)
"""Identity and raw-dispatch primitives that are never intercepted."""

_ROUTINE_TYPES = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodDescriptorType,
    types.WrapperDescriptorType,
    types.ClassMethodDescriptorType,
    staticmethod,
    classmethod,
)


# -----------------------------------------------------------------------------
# Discovery
# -----------------------------------------------------------------------------


def lookup_attribute(target_type: type, name: str) -> Tuple[type, Any]:
    """Find `name` in the MRO of `target_type`, ignoring the metaclass."""
    for klass in target_type.__mro__:
        namespace = vars(klass)
        if name in namespace:
            return klass, namespace[name]
    raise AttributeError(name)


def _is_operation(target_type: type, name: str, include_special: bool) -> bool:
    if name in EXCLUDED_OPERATIONS:
        return False
    if name.startswith("_"):
        if not include_special or name not in SPECIAL_OPERATIONS:
            return False
    try:
        owner, attr = lookup_attribute(target_type, name)
    except AttributeError:
        return False
    if name in SPECIAL_OPERATIONS:
        return owner is not object and attr is not None
    return isinstance(attr, _ROUTINE_TYPES)


def discover_operations(
    target_type: type,
    omit: Iterable[str] = (),
    include_special: bool = True,
) -> Tuple[str, ...]:
    """Return the sorted operation set of `target_type`.

    Args:
        target_type: The type whose operations are discovered.
        omit: Names to leave out of the set.
        include_special: Whether operator/protocol methods are included.
    """
    omitted = frozenset(omit)
    operations = tuple(
        sorted(
            name
            for name in dir(target_type)
            if name not in omitted
            and _is_operation(target_type, name, include_special)
        )
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Discovered %d operations on %s (omitted %d)",
            len(operations),
            get_type_name(target_type),
            len(omitted),
        )
    return operations


def check_reserved(
    target_type: type, operations: Iterable[str], reserved: Collection[str]
) -> None:
    """Raise `ReservedNameError` if any operation shadows a reserved name."""
    collisions = sorted(set(operations).intersection(reserved))
    if not collisions:
        return
    raise ReservedNameError(
        f"{get_type_name(target_type)} defines operations reserved by the wrapper: "
        + ", ".join(collisions),
        [
            f"Pass omit={tuple(collisions)!r} to leave them untouched",
            "Rename the operations on the target type",
        ],
        {
            "target_type": get_type_name(target_type, qualname=True),
            "operation": ", ".join(collisions),
            "reserved": sorted(reserved),
        },
    )


# -----------------------------------------------------------------------------
# Dispatch Stubs
# -----------------------------------------------------------------------------


def _unwrap_descriptor(attr: Any) -> Any:
    if isinstance(attr, (staticmethod, classmethod)):
        return attr.__func__
    return attr


def make_operation(target_type: type, name: str) -> Callable[..., Any]:
    """Build the wrapper-side body of operation `name`.

    The body routes every call to ``self._dispatch(name, args, kwargs)``,
    which each wrapper mode implements. Name and docstring are copied from
    the original and it is reachable through ``__wrapped__``. In-place
    operators return the wrapper itself when the target updated in place.
    """
    if name in INPLACE_OPERATIONS:

        def operation(self, *args: Any, **kwargs: Any) -> Any:
            result = self._dispatch(name, args, kwargs)
            # `x op= y` rebinds x to the result.
            return self if result is self._wrapped else result

    else:

        def operation(self, *args: Any, **kwargs: Any) -> Any:
            return self._dispatch(name, args, kwargs)

    _owner, attr = lookup_attribute(target_type, name)
    original = _unwrap_descriptor(attr)
    functools.update_wrapper(operation, original)
    operation.__name__ = name
    return operation
