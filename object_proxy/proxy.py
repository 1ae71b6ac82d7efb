r"""Proxy mode: per-operation before and after handlers.

For an intercepted call ``wrapper.m(*args, **kwargs)``:

  1. a ``before_m`` handler, if registered, is called with ``(args, kwargs)``
     and its return value replaces the arguments of the real call;
  2. ``m`` is invoked on the target;
  3. an ``after_m`` handler, if registered, is called with the result and
     its return value replaces the result.

Handlers are registered explicitly (`on_before`, `on_after`,
`register_handler`) or through the name pattern ``wrapper.before_m(fn)`` /
``@wrapper.after_m``. The pattern only applies to names that are neither
wrapper attributes nor target attributes; a real ``before_m`` on the target
always wins.

Example:
    >>> proxy = wrap_proxy(account)
    >>> @proxy.before_deposit
    ... def double(args, kwargs):
    ...     return (args[0] * 2,), kwargs
    >>> proxy.deposit(10)  # the account receives 20
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .base import Wrapper
from .config import Mode
from .factory import WrapperFactory
from .registry import HandlerKey, HandlerRegistry, KeyLike, Phase
from .utils import AfterHandler, BeforeHandler, HandlerResultError

logger = logging.getLogger(__name__)

__all__ = [
    "ProxyWrapper",
    "ProxyFactory",
]


def _unpack_arguments(
    key: HandlerKey, value: Any
) -> Tuple[Tuple[Any, ...], Dict[str, Any]]:
    """Validate the ``(args, kwargs)`` pair returned by a before-handler."""
    if isinstance(value, (tuple, list)) and len(value) == 2:
        args, kwargs = value
        if isinstance(args, (tuple, list)) and isinstance(kwargs, Mapping):
            return tuple(args), dict(kwargs)
    raise HandlerResultError(
        f"Handler '{key}' must return an (args, kwargs) pair",
        [
            "Return the arguments unchanged with `return args, kwargs`",
            "Use a tuple for positional arguments and a dict for keyword arguments",
        ],
        {
            "operation": key.operation,
            "expected_type": "Tuple[tuple, dict]",
            "actual_type": type(value).__name__,
        },
    )


class ProxyWrapper(Wrapper):
    """Wrapper invoking per-operation before/after handlers."""

    __slots__ = ("_handlers",)

    __mode__ = Mode.PROXY
    __reserved_names__ = Wrapper.__reserved_names__ | {
        "handlers",
        "on_before",
        "on_after",
        "register_handler",
        "remove_handler",
    }

    def __init__(self, wrapped: Any) -> None:
        super().__init__(wrapped)
        object.__setattr__(self, "_handlers", HandlerRegistry(type(self).__operations__))

    @property
    def handlers(self) -> HandlerRegistry:
        """The handler registry of this wrapper."""
        return self._handlers

    # -----------------------------------------------------------------------------
    # Registration
    # -----------------------------------------------------------------------------

    def register_handler(
        self, key: KeyLike, handler: Callable[..., Any]
    ) -> Callable[..., Any]:
        """Register `handler` under ``before_<op>`` / ``after_<op>``."""
        return self._handlers.register(key, handler)

    def remove_handler(self, key: KeyLike) -> Callable[..., Any]:
        """Remove and return the handler under `key`."""
        return self._handlers.unregister(key)

    def on_before(
        self, operation: str, handler: Optional[BeforeHandler] = None
    ) -> Any:
        """Register a before-handler; without `handler`, return a decorator."""
        return self._registration(HandlerKey(Phase.BEFORE, operation))(handler)

    def on_after(
        self, operation: str, handler: Optional[AfterHandler] = None
    ) -> Any:
        """Register an after-handler; without `handler`, return a decorator."""
        return self._registration(HandlerKey(Phase.AFTER, operation))(handler)

    def _registration(self, key: HandlerKey) -> Callable[..., Any]:
        self._handlers._assert_operation(key)

        def register(handler: Optional[Callable[..., Any]] = None) -> Any:
            if handler is None:
                return lambda fn: self._handlers.register(key, fn)
            return self._handlers.register(key, handler)

        register.__name__ = str(key)
        return register

    def __getattr__(self, name: str) -> Any:
        try:
            return super().__getattr__(name)
        except AttributeError:
            key = HandlerKey.split(name)
            if key is None or key.operation not in self._handlers.operations:
                raise
        return self._registration(key)

    # -----------------------------------------------------------------------------
    # Dispatch
    # -----------------------------------------------------------------------------

    def _dispatch(self, name: str, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
        before = self._handlers.get(Phase.BEFORE, name)
        if before is not None:
            args, kwargs = _unpack_arguments(
                HandlerKey(Phase.BEFORE, name), before(args, kwargs)
            )

        result = self._forward(name, args, kwargs)

        after = self._handlers.get(Phase.AFTER, name)
        if after is not None:
            result = after(result)
        return result


class ProxyFactory(WrapperFactory):
    """Factory of proxy wrappers over one target type."""

    wrapper_base = ProxyWrapper
