r"""Base class of every synthesized wrapper.

A wrapper owns exactly one target (`wrapped`) and exposes the target's
operation set; each operation body calls ``self._dispatch(name, args,
kwargs)``, which the mode subclasses implement. Everything that is not an
operation is delegated to the target:

  - attribute reads fall through `__getattr__`,
  - attribute writes and deletes go to the target unless the name is wrapper
    state (a slot or a property of the wrapper type),
  - `hash()` is the target's hash and is never intercepted.

Class-level metadata uses dunder names (`__mode__`, `__reserved_names__`,
`__operations__`, `__target_type__`) so it never hides a target attribute.
The public management API of a mode (`wrapped`, `handlers`, `on_before`,
`before_call`, `method_call`, ...) does take precedence over target data
attributes of the same name; those stay reachable through `wrapped`.

\dot
digraph WrapperPattern {
    "Wrapper" -> "ProxyWrapper";
    "Wrapper" -> "TrackWrapper";
    "Wrapper" -> "CatchWrapper";
}
\enddot
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, FrozenSet, List, Optional, Tuple

from .config import Mode
from .operations import EXCLUDED_OPERATIONS

__all__ = [
    "Wrapper",
]


def _slot_names(cls: type) -> FrozenSet[str]:
    names = set()
    for klass in cls.__mro__:
        slots = vars(klass).get("__slots__", ())
        names.update((slots,) if isinstance(slots, str) else slots)
    return frozenset(names)


class Wrapper:
    """Common plumbing of proxy, track and catch wrappers.

    Attributes:
        __mode__: Dispatch policy of the wrapper class.
        __reserved_names__: Names a target operation may not use.
        __operations__: Operation set of a synthesized wrapper type.
        __target_type__: The type the operation set was discovered on.
    """

    __slots__ = ("_wrapped",)

    __mode__: ClassVar[Optional[Mode]] = None
    __reserved_names__: ClassVar[FrozenSet[str]] = (
        frozenset({"wrapped"}) | EXCLUDED_OPERATIONS
    )
    __operations__: ClassVar[Tuple[str, ...]] = ()
    __target_type__: ClassVar[Optional[type]] = None
    _internal_names: ClassVar[FrozenSet[str]] = frozenset(__slots__)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._internal_names = _slot_names(cls)

    def __init__(self, wrapped: Any) -> None:
        object.__setattr__(self, "_wrapped", wrapped)

    # -----------------------------------------------------------------------------
    # Target Access
    # -----------------------------------------------------------------------------

    @property
    def wrapped(self) -> Any:
        """The target every forwarded call goes to."""
        return self._wrapped

    @wrapped.setter
    def wrapped(self, target: Any) -> None:
        object.__setattr__(self, "_wrapped", target)

    def _forward(self, name: str, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
        """Invoke operation `name` on the target."""
        return getattr(self._wrapped, name)(*args, **kwargs)

    def _dispatch(self, name: str, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
        raise NotImplementedError(
            f"Subclasses must implement `{type(self).__name__}._dispatch` method."
        )

    # -----------------------------------------------------------------------------
    # Attribute Delegation
    # -----------------------------------------------------------------------------

    def _is_internal(self, name: str) -> bool:
        cls = type(self)
        return name in cls._internal_names or isinstance(
            getattr(cls, name, None), property
        )

    def __getattr__(self, name: str) -> Any:
        if name in type(self)._internal_names:
            raise AttributeError(name)
        return getattr(object.__getattribute__(self, "_wrapped"), name)

    def __setattr__(self, name: str, value: Any) -> None:
        if self._is_internal(name):
            object.__setattr__(self, name, value)
        else:
            setattr(self._wrapped, name, value)

    def __delattr__(self, name: str) -> None:
        if self._is_internal(name):
            object.__delattr__(self, name)
        else:
            delattr(self._wrapped, name)

    def __dir__(self) -> List[str]:
        return sorted(set(dir(self._wrapped)) | set(dir(type(self))))

    def __hash__(self) -> int:
        return hash(self._wrapped)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._wrapped!r})"
