r"""Wrapper factory: synthesizes wrapper types and builds wrapper instances.

A `WrapperFactory` is created once per wrap request on a type. It discovers
the operation set, rejects operations shadowing wrapper management names and
synthesizes a brand-new wrapper type whose operations dispatch through the
mode-specific `_dispatch`. The factory is callable like the target type:
calling it constructs a target with the same arguments and wraps it, and
other public names (class attributes, static and class methods) are read
from the target type. Wrappers are not instances of the target type; use
`factory.is_instance` or `unwrap`.

\dot
digraph WrapperFactory {
    rankdir=LR;
    node [shape=rectangle];
    "WrapperFactory" -> "ProxyFactory";
    "WrapperFactory" -> "TrackFactory";
    "WrapperFactory" -> "CatchFactory";
}
\enddot
"""

from __future__ import annotations

import logging
from inspect import isclass
from types import new_class
from typing import Any, ClassVar, Dict, Optional, Tuple, Type, Union

from .base import Wrapper
from .config import WrapOptions, normalize_options
from .operations import check_reserved, discover_operations, make_operation
from .utils import WrapError, get_type_name

logger = logging.getLogger(__name__)

__all__ = [
    "WrapperFactory",
    "synthesize_wrapper_type",
    "factory_for",
]


def synthesize_wrapper_type(
    base: Type[Wrapper], target_type: type, operations: Tuple[str, ...]
) -> Type[Wrapper]:
    """Create a new subclass of `base` exposing `operations` of `target_type`."""
    namespace: Dict[str, Any] = {
        name: make_operation(target_type, name) for name in operations
    }
    namespace.update(
        __slots__=(),
        __hash__=base.__hash__,
        __module__=base.__module__,
        __doc__=target_type.__doc__,
        __operations__=operations,
        __target_type__=target_type,
    )
    mode = base.__mode__.value if base.__mode__ is not None else "wrapper"
    name = f"{mode.capitalize()}[{get_type_name(target_type)}]"
    cls = new_class(name, (base,), {}, lambda ns: ns.update(namespace))
    cls.__qualname__ = name

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Synthesized %s with %d operations", name, len(operations))
    return cls


class WrapperFactory:
    """First-class factory of one synthesized wrapper type.

    Subclasses set `wrapper_base` to the wrapper class of their mode.
    """

    wrapper_base: ClassVar[Type[Wrapper]] = Wrapper

    def __init__(
        self,
        target_type: type,
        options: Union[Dict[str, Any], WrapOptions, None] = None,
        **fields: Any,
    ) -> None:
        if not isclass(target_type):
            raise WrapError(
                f"{target_type!r} is not a type",
                ["Pass the class itself, or wrap the instance directly"],
                {
                    "expected_type": "type",
                    "actual_type": type(target_type).__name__,
                },
            )
        if self.wrapper_base.__mode__ is not None:
            fields["mode"] = self.wrapper_base.__mode__
        self._target_type = target_type
        self._options = normalize_options(options, **fields)

        operations = discover_operations(
            target_type,
            omit=self._options.omit,
            include_special=self._options.include_special,
        )
        if issubclass(target_type, Wrapper):
            # Only the inner wrapper's operations; its management API passes through.
            operations = tuple(
                name for name in operations if name in target_type.__operations__
            )
        check_reserved(target_type, operations, self.wrapper_base.__reserved_names__)
        self._operations = operations
        self._wrapper_type = synthesize_wrapper_type(
            self.wrapper_base, target_type, operations
        )

    # -----------------------------------------------------------------------------
    # Introspection
    # -----------------------------------------------------------------------------

    @property
    def target_type(self) -> type:
        """The wrapped type."""
        return self._target_type

    @property
    def wrapper_type(self) -> Type[Wrapper]:
        """The synthesized wrapper type."""
        return self._wrapper_type

    @property
    def operations(self) -> Tuple[str, ...]:
        """Names of the intercepted operations."""
        return self._operations

    @property
    def options(self) -> WrapOptions:
        return self._options

    def is_instance(self, instance: Any) -> bool:
        """Return True if `instance` was built by this factory."""
        return isinstance(instance, self._wrapper_type)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._wrapper_type.__name__}>"

    def __getattr__(self, name: str) -> Any:
        # Class attributes, static and class methods of the target type.
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._target_type, name)

    # -----------------------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------------------

    def __call__(self, *args: Any, **kwargs: Any) -> Wrapper:
        """Construct a target with the given arguments and wrap it."""
        return self.wrap(self._target_type(*args, **kwargs))

    def wrap(self, target: Any) -> Wrapper:
        """Wrap an existing instance of the target type."""
        self._assert_target(target)
        return self._wrapper_type(target)

    def _assert_target(self, target: Any) -> None:
        if isinstance(target, self._target_type):
            return
        raise WrapError(
            f"{type(self).__name__} for {get_type_name(self._target_type)} "
            + f"cannot wrap a {type(target).__name__}",
            ["Create a factory for the target's own type"],
            {
                "expected_type": get_type_name(self._target_type),
                "actual_type": type(target).__name__,
                "target_type": get_type_name(self._target_type, qualname=True),
            },
        )


def factory_for(
    factory_cls: Type[WrapperFactory], target: Any, options: Optional[WrapOptions]
) -> Union[WrapperFactory, Wrapper]:
    """Return a factory for a type target, or a ready wrapper for an instance."""
    if isclass(target):
        return factory_cls(target, options)
    return factory_cls(type(target), options).wrap(target)
