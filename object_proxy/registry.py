r"""Handler registry for proxy wrappers.

This module implements `HandlerRegistry`, a per-wrapper mapping of
``(phase, operation)`` keys to handler callables, with consistent error
reporting when keys are malformed, unknown or absent.

Key points:
  - A key is a `HandlerKey`, a ``(phase, operation)`` tuple, or its string
    form ``before_<operation>`` / ``after_<operation>``.
  - Only operations of the wrapper's operation set can carry handlers.
  - Registering over an existing key replaces the handler.

\dot
digraph HandlerRegistry {
    rankdir=LR;
    node [shape=rectangle];
    "HandlerKey" -> "HandlerRegistry" -> "ProxyWrapper";
}
\enddot
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import (
    Any,
    Callable,
    Dict,
    FrozenSet,
    Iterable,
    Iterator,
    List,
    NamedTuple,
    Optional,
    Union,
)

from .utils import RegistryError, close_matches, validate_handler

logger = logging.getLogger(__name__)

__all__ = [
    "Phase",
    "HandlerKey",
    "HandlerRegistry",
]


class Phase(str, Enum):
    """Position of a handler relative to the forwarded call."""

    BEFORE = "before"
    AFTER = "after"


class HandlerKey(NamedTuple):
    """Registry key of a proxy handler."""

    phase: Phase
    operation: str

    def __str__(self) -> str:
        return f"{self.phase.value}_{self.operation}"

    @classmethod
    def split(cls, name: str) -> Optional["HandlerKey"]:
        """Split ``before_x`` / ``after_x`` into a key, or return None."""
        for phase in Phase:
            prefix = f"{phase.value}_"
            if name.startswith(prefix) and len(name) > len(prefix):
                return cls(phase, name[len(prefix) :])
        return None

    @classmethod
    def parse(cls, key: "KeyLike") -> "HandlerKey":
        """Coerce `key` into a `HandlerKey`.

        Raises:
            RegistryError: if `key` is neither a pair nor a prefixed name.
        """
        if isinstance(key, HandlerKey):
            return key
        if isinstance(key, str):
            parsed = cls.split(key)
            if parsed is not None:
                return parsed
        elif isinstance(key, tuple) and len(key) == 2:
            phase, operation = key
            try:
                return cls(Phase(phase), str(operation))
            except ValueError:
                pass
        raise RegistryError(
            f"Malformed handler key {key!r}",
            [
                "Use 'before_<operation>' or 'after_<operation>'",
                "Or pass a (Phase.BEFORE, '<operation>') pair",
            ],
            {"key": repr(key), "key_type": type(key).__name__},
        )


KeyLike = Union[HandlerKey, str, tuple]


class HandlerRegistry:
    """Mapping of handler keys to handlers for one proxy wrapper.

    Error semantics:
        Unknown operations and absent keys are reported via `RegistryError`
        with a suggestions list and context payload suitable for logs.
    """

    __slots__ = ("_repository", "_operations")

    def __init__(self, operations: Iterable[str]) -> None:
        self._repository: Dict[HandlerKey, Callable[..., Any]] = {}
        self._operations: FrozenSet[str] = frozenset(operations)

    def _get_mapping(self) -> Dict[HandlerKey, Callable[..., Any]]:
        """Return the underlying mapping."""
        return self._repository

    # -----------------------------------------------------------------------------
    # Read Access
    # -----------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._get_mapping())

    def __iter__(self) -> Iterator[HandlerKey]:
        return iter(list(self._get_mapping()))

    def __contains__(self, key: Any) -> bool:
        try:
            return HandlerKey.parse(key) in self._get_mapping()
        except RegistryError:
            return False

    def __repr__(self) -> str:
        keys = ", ".join(str(key) for key in self._get_mapping())
        return f"{self.__class__.__name__}({keys})"

    @property
    def operations(self) -> FrozenSet[str]:
        """Operations that may carry handlers."""
        return self._operations

    def get(self, phase: Phase, operation: str) -> Optional[Callable[..., Any]]:
        """Return the handler for ``(phase, operation)`` or None."""
        return self._get_mapping().get(HandlerKey(phase, operation))

    def keys(self) -> List[str]:
        """Return the registered keys in their string form."""
        return [str(key) for key in self._get_mapping()]

    def __getitem__(self, key: KeyLike) -> Callable[..., Any]:
        parsed = HandlerKey.parse(key)
        return self._assert_presence(parsed)[parsed]

    # -----------------------------------------------------------------------------
    # Write Access
    # -----------------------------------------------------------------------------

    def register(self, key: KeyLike, handler: Callable[..., Any]) -> Callable[..., Any]:
        """Store `handler` under `key`, replacing any previous handler.

        Returns:
            The handler, so registration works as a decorator.

        Raises:
            RegistryError: if the key is malformed or names an unknown operation.
            ValidationError: if `handler` is not callable.
        """
        parsed = HandlerKey.parse(key)
        self._assert_operation(parsed)
        self._get_mapping()[parsed] = validate_handler(handler, str(parsed))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Registered %s handler", parsed)
        return handler

    def unregister(self, key: KeyLike) -> Callable[..., Any]:
        """Remove and return the handler under `key`.

        Raises:
            RegistryError: if no handler is registered under `key`.
        """
        parsed = HandlerKey.parse(key)
        handler = self._assert_presence(parsed).pop(parsed)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Removed %s handler", parsed)
        return handler

    def clear(self) -> None:
        """Remove every handler."""
        self._get_mapping().clear()

    # -----------------------------------------------------------------------------
    # Helper Functions for Error Handling with Rich Context
    # -----------------------------------------------------------------------------

    def _assert_operation(self, key: HandlerKey) -> None:
        """Raise `RegistryError` if the key's operation is not interceptable."""
        if key.operation in self._operations:
            return
        matches = close_matches(key.operation, self._operations)
        suggestions = [f"Did you mean '{match}'?" for match in matches]
        suggestions.append("Handlers can only be attached to intercepted operations")
        raise RegistryError(
            f"Cannot register '{key}': '{key.operation}' is not an intercepted operation",
            suggestions,
            {
                "operation": key.operation,
                "phase": key.phase.value,
                "available_operations": sorted(self._operations),
            },
        )

    def _assert_presence(self, key: HandlerKey) -> Dict[HandlerKey, Callable[..., Any]]:
        """Return mapping if `key` is present; otherwise raise `RegistryError`."""
        mapping = self._get_mapping()
        if key not in mapping:
            raise RegistryError(
                f"No handler registered under '{key}'",
                [
                    "Check that the handler was registered correctly",
                    "Use `key in registry` to verify presence",
                    f"Registry contains {len(mapping)} handlers",
                ],
                {
                    "operation": key.operation,
                    "phase": key.phase.value,
                    "registered": [str(k) for k in mapping],
                },
            )
        return mapping
