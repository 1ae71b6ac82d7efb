r"""Public entry points for building wrappers.

Each ``wrap_*`` function accepts either an instance or a type:

  - an instance yields a ready wrapper around exactly that instance,
  - a type yields a factory that is callable like the type (fake mode
    yields the fake subclass itself).

`wrap` is the generic form taking the mode explicitly.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Optional, Type, Union

from .base import Wrapper
from .catch import CatchFactory
from .config import Mode, WrapOptions, normalize_options
from .factory import WrapperFactory, factory_for
from .fake import synthesize_fake
from .proxy import ProxyFactory
from .track import TrackFactory
from .utils import DispatchFunction

__all__ = [
    "wrap",
    "wrap_proxy",
    "wrap_track",
    "wrap_fake",
    "wrap_catch",
    "is_wrapper",
    "unwrap",
]

Options = Union[Dict[str, Any], WrapOptions, None]

_FACTORIES: Dict[Mode, Type[WrapperFactory]] = {
    Mode.PROXY: ProxyFactory,
    Mode.TRACK: TrackFactory,
    Mode.CATCH: CatchFactory,
}


def wrap(
    target: Any, mode: Union[Mode, str], options: Options = None, **fields: Any
) -> Any:
    """Wrap `target` in the given mode.

    Args:
        target: An instance, or a type.
        mode: One of `Mode` or its string value.
        options: Raw options dict or `WrapOptions`.
        **fields: Individual option fields merged over `options`.

    Returns:
        A wrapper for an instance, a factory for a type, or the fake
        subclass in fake mode.
    """
    resolved = normalize_options(options, mode=mode, **fields)
    if resolved.mode is Mode.FAKE:
        return synthesize_fake(target, resolved)
    return factory_for(_FACTORIES[resolved.mode], target, resolved)


def wrap_proxy(target: Any, options: Options = None, **fields: Any) -> Any:
    """Wrap `target` with per-operation before/after handlers."""
    return wrap(target, Mode.PROXY, options, **fields)


def wrap_track(target: Any, options: Options = None, **fields: Any) -> Any:
    """Wrap `target` with global before_call/after_call observers."""
    return wrap(target, Mode.TRACK, options, **fields)


def wrap_fake(
    target_type: type,
    omit: Iterable[str] = (),
    customize: Optional[Callable[[type], Any]] = None,
    options: Options = None,
    **fields: Any,
) -> type:
    """Return a subclass of `target_type` whose operations do nothing.

    Args:
        target_type: The type to fake.
        omit: Operation names keeping their real implementation.
        customize: Callable receiving the fake class to install overrides.
    """
    if omit:
        fields["omit"] = omit
    if customize is not None:
        fields["customize"] = customize
    return wrap(target_type, Mode.FAKE, options, **fields)


def wrap_catch(
    target: Any,
    method_call: Optional[DispatchFunction] = None,
    options: Options = None,
    **fields: Any,
) -> Any:
    """Route every operation of `target` through one dispatch function.

    For a type, `method_call` becomes the factory default; for an instance it
    is that wrapper's dispatch function.
    """
    if method_call is not None:
        fields["method_call"] = method_call
    return wrap(target, Mode.CATCH, options, **fields)


def is_wrapper(obj: Any) -> bool:
    """Return True if `obj` is a proxy, track or catch wrapper."""
    return isinstance(obj, Wrapper)


def unwrap(obj: Any) -> Any:
    """Follow nested wrappers down to the innermost target."""
    while isinstance(obj, Wrapper):
        obj = obj.wrapped
    return obj
