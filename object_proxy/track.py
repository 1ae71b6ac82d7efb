r"""Track mode: one global before-call and one global after-call observer.

Every intercepted call runs ``before_call(name, args, kwargs)``, forwards to
the target, then runs ``after_call(name, result)``. Observer return values
are discarded, so tracking never changes arguments or results.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from .base import Wrapper
from .config import Mode
from .factory import WrapperFactory
from .utils import validate_handler

logger = logging.getLogger(__name__)

__all__ = [
    "TrackWrapper",
    "TrackFactory",
]

Observer = Optional[Callable[..., Any]]


class TrackWrapper(Wrapper):
    """Wrapper reporting every call to two global observers."""

    __slots__ = ("_before_call", "_after_call")

    __mode__ = Mode.TRACK
    __reserved_names__ = Wrapper.__reserved_names__ | {"before_call", "after_call"}

    def __init__(self, wrapped: Any) -> None:
        super().__init__(wrapped)
        object.__setattr__(self, "_before_call", None)
        object.__setattr__(self, "_after_call", None)

    def before_call(self, handler: Observer) -> Observer:
        """Set the observer called with ``(name, args, kwargs)``; None clears it.

        Returns the handler, so it can be used as a decorator.
        """
        self._set_observer("_before_call", handler)
        return handler

    def after_call(self, handler: Observer) -> Observer:
        """Set the observer called with ``(name, result)``; None clears it."""
        self._set_observer("_after_call", handler)
        return handler

    def _set_observer(self, slot: str, handler: Observer) -> None:
        if handler is not None:
            validate_handler(handler, slot.lstrip("_"))
        object.__setattr__(self, slot, handler)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "%s %s observer on %s",
                "Set" if handler is not None else "Cleared",
                slot.lstrip("_"),
                type(self).__name__,
            )

    def _dispatch(self, name: str, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
        if self._before_call is not None:
            self._before_call(name, args, dict(kwargs))

        result = self._forward(name, args, kwargs)

        if self._after_call is not None:
            self._after_call(name, result)
        return result


class TrackFactory(WrapperFactory):
    """Factory of track wrappers over one target type."""

    wrapper_base = TrackWrapper
