"""Exceptions and small helpers shared by the wrapper modes.

This module defines a small hierarchy of rich exceptions, plus the callable
protocols each handler kind is expected to satisfy.

Exceptions:
    ValidationError: Base class carrying `suggestions` and `context` metadata.
    WrapError: Raised when a target cannot be wrapped in the requested mode.
    ReservedNameError: Raised when an operation shadows a wrapper management name.
    RegistryError: Raised for malformed, unknown or absent handler keys.
    HandlerResultError: Raised when a before-handler returns a malformed pair.

Helpers:
    get_type_name(cls, qualname=False): Return a human-readable type name.
"""

from __future__ import annotations

import difflib
from inspect import isclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from typing_extensions import Protocol


Args = Tuple[Any, ...]
Kwargs = Dict[str, Any]


class ValidationError(Exception):
    """Base exception with structured context.

    Attributes:
        message: Human-readable error text.
        suggestions: List of short, imperative hints for remediation.
        context: Free-form key/value details safe to log and render.
    """

    def __init__(
        self,
        message: str,
        suggestions: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.suggestions = suggestions or []
        self.context = context or {}
        super().__init__(self._build_enhanced_message())

    def _build_enhanced_message(self) -> str:
        """Embed key context and suggestions into the exception string."""
        lines = [self.message]

        if self.context:
            if "expected_type" in self.context and "actual_type" in self.context:
                lines.append(f"  Expected: {self.context['expected_type']}")
                lines.append(f"  Actual: {self.context['actual_type']}")
            if "target_type" in self.context:
                lines.append(f"  Target: {self.context['target_type']}")
            if "operation" in self.context:
                lines.append(f"  Operation: {self.context['operation']}")

        if self.suggestions:
            lines.append("  Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"    • {suggestion}")

        return "\n".join(lines)


class WrapError(ValidationError):
    """Raised when a target cannot be wrapped in the requested mode."""


class ReservedNameError(WrapError):
    """Raised when a target operation collides with a wrapper management name."""


class RegistryError(ValidationError):
    """Raised for handler keys that are malformed, unknown or absent."""


class HandlerResultError(ValidationError):
    """Raised when a before-handler does not return an ``(args, kwargs)`` pair."""


# -----------------------------------------------------------------------------
# Handler Protocols
# -----------------------------------------------------------------------------


class BeforeHandler(Protocol):
    """Proxy before-handler: receives and returns the call arguments."""

    def __call__(self, args: Args, kwargs: Kwargs) -> Tuple[Args, Kwargs]: ...


class AfterHandler(Protocol):
    """Proxy after-handler: receives and returns the call result."""

    def __call__(self, result: Any) -> Any: ...


class DispatchFunction(Protocol):
    """Catch dispatch function: decides how every call is handled."""

    def __call__(self, name: str, args: Args, kwargs: Kwargs) -> Any: ...


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def get_type_name(cls: type, qualname: bool = False) -> str:
    """Return a readable name for a type.

    Args:
        cls: The class or type object.
        qualname: If True, return the qualified name when available.

    Returns:
        The type's `__qualname__`, `__name__`, or a string fallback.
    """
    if not isclass(cls):
        raise ValidationError(f"{cls!r} is not a class")
    if qualname and hasattr(cls, "__qualname__"):
        return getattr(cls, "__qualname__")
    elif hasattr(cls, "__name__"):
        return getattr(cls, "__name__")
    else:
        return str(cls)



def validate_handler(handler: Any, role: str) -> Callable[..., Any]:
    """Return `handler` if callable, otherwise raise `ValidationError`."""
    if callable(handler):
        return handler
    raise ValidationError(
        f"{role} handler must be callable",
        [
            "Pass a function, lambda or bound method",
            "Use the registration method as a decorator to register a def",
        ],
        {
            "expected_type": "callable",
            "actual_type": type(handler).__name__,
        },
    )


def close_matches(name: str, candidates: Iterable[str]) -> List[str]:
    """Return up to three candidates resembling `name`, best first."""
    return difflib.get_close_matches(name, list(candidates), n=3, cutoff=0.6)
