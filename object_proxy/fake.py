r"""Fake mode: a subclass whose operations do nothing.

`synthesize_fake` builds a subclass of the target type in which every
operation becomes a stub returning None. The real implementation stays
reachable as ``native_<name>`` with its descriptor kind preserved, so partial
fakes, stubs and spies can call through:

    >>> def customize(cls):
    ...     def save(self, *args):
    ...         saved.append(args)
    ...         return self.native_save(*args)
    ...     cls.save = save
    >>> FakeStore = wrap_fake(Store, omit=["load"], customize=customize)

Names in `omit` keep their real implementation under their own name. The
omit sequence is only read.
"""

from __future__ import annotations

import functools
import logging
from inspect import isclass
from types import new_class
from typing import Any, Dict

from .config import WrapOptions
from .operations import check_reserved, discover_operations, lookup_attribute
from .utils import WrapError, get_type_name

logger = logging.getLogger(__name__)

__all__ = [
    "NATIVE_PREFIX",
    "synthesize_fake",
]

NATIVE_PREFIX = "native_"


def _make_stub(original: Any) -> Any:
    """Return a no-op with the same name, doc and descriptor kind as `original`."""
    func = original.__func__ if isinstance(original, (staticmethod, classmethod)) else original

    def stub(*args: Any, **kwargs: Any) -> None:
        return None

    functools.update_wrapper(stub, func)
    if isinstance(original, staticmethod):
        return staticmethod(stub)
    if isinstance(original, classmethod):
        return classmethod(stub)
    return stub


def synthesize_fake(target_type: Any, options: WrapOptions) -> type:
    """Build the fake subclass of `target_type` described by `options`.

    Raises:
        WrapError: if `target_type` is not a type or cannot be subclassed.
        ReservedNameError: if a ``native_`` alias would shadow an existing name.
    """
    if not isclass(target_type):
        raise WrapError(
            "Fake mode requires a type",
            [f"Pass type(obj), i.e. {type(target_type).__name__}, instead of the instance"],
            {"expected_type": "type", "actual_type": type(target_type).__name__},
        )

    operations = discover_operations(
        target_type, omit=options.omit, include_special=options.include_special
    )
    aliases = [NATIVE_PREFIX + name for name in operations]
    check_reserved(target_type, aliases, set(dir(target_type)))

    name = f"Fake[{get_type_name(target_type)}]"
    namespace: Dict[str, Any] = {
        "__module__": target_type.__module__,
        "__doc__": target_type.__doc__,
        "__native_operations__": operations,
    }
    for operation in operations:
        _owner, original = lookup_attribute(target_type, operation)
        namespace[NATIVE_PREFIX + operation] = original
        namespace[operation] = _make_stub(original)
    if "__eq__" in namespace and "__hash__" not in namespace:
        namespace["__hash__"] = target_type.__hash__

    try:
        fake = new_class(name, (target_type,), {}, lambda ns: ns.update(namespace))
    except TypeError as e:
        raise WrapError(
            f"Cannot fake {get_type_name(target_type)}: {e}",
            ["Fake a subclassable type, or use catch mode to stub calls"],
            {"target_type": get_type_name(target_type, qualname=True)},
        ) from e
    fake.__qualname__ = name

    for operation, implementation in options.overrides.items():
        setattr(fake, operation, implementation)
    if options.customize is not None:
        options.customize(fake)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Faked %d operations of %s (%d overrides)",
            len(operations),
            get_type_name(target_type),
            len(options.overrides),
        )
    return fake

