r"""Catch mode: every call goes through one dispatch function.

Each intercepted call becomes ``method_call(name, args, kwargs)``. The
dispatch function of a wrapper is resolved when the wrapper is built:

  1. the function passed to `CatchFactory.wrap` (instance override),
  2. the factory default set with `CatchFactory.method_call`,
  3. transparent forwarding to the target.

The factory also carries an `instance_created` hook, called once with every
wrapper it builds, right after construction.

Example:
    >>> factory = wrap_catch(Account)
    >>> @factory.instance_created
    ... def remember(wrapper):
    ...     accounts.append(wrapper)
    >>> account = factory(owner="ada")
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Tuple, Union

from .base import Wrapper
from .config import Mode, WrapOptions
from .factory import WrapperFactory
from .utils import DispatchFunction, validate_handler

logger = logging.getLogger(__name__)

__all__ = [
    "CatchWrapper",
    "CatchFactory",
]


class CatchWrapper(Wrapper):
    """Wrapper routing every operation through a dispatch function."""

    __slots__ = ("_method_call",)

    __mode__ = Mode.CATCH
    __reserved_names__ = Wrapper.__reserved_names__ | {"method_call"}

    def __init__(
        self, wrapped: Any, method_call: Optional[DispatchFunction] = None
    ) -> None:
        super().__init__(wrapped)
        if method_call is not None:
            validate_handler(method_call, "method_call")
        object.__setattr__(self, "_method_call", method_call)

    @property
    def method_call(self) -> DispatchFunction:
        """The effective dispatch function; assigning None restores forwarding."""
        if self._method_call is None:
            return self._forward
        return self._method_call

    @method_call.setter
    def method_call(self, handler: Optional[DispatchFunction]) -> None:
        if handler is not None:
            validate_handler(handler, "method_call")
        object.__setattr__(self, "_method_call", handler)

    def _dispatch(self, name: str, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
        return self.method_call(name, args, kwargs)


class CatchFactory(WrapperFactory):
    """Factory of catch wrappers carrying the type-level defaults.

    The default dispatch function and the `instance_created` hook are read
    each time a wrapper is built; changing them never affects wrappers that
    already exist.
    """

    wrapper_base = CatchWrapper

    def __init__(
        self,
        target_type: type,
        options: Union[Dict[str, Any], WrapOptions, None] = None,
        **fields: Any,
    ) -> None:
        super().__init__(target_type, options, **fields)
        self._method_call: Optional[DispatchFunction] = self._options.method_call
        self._instance_created: Optional[Callable[[CatchWrapper], Any]] = None

    @property
    def default_method_call(self) -> Optional[DispatchFunction]:
        return self._method_call

    def method_call(self, handler: Optional[DispatchFunction]) -> Optional[DispatchFunction]:
        """Set the default dispatch function of wrappers built from now on."""
        if handler is not None:
            validate_handler(handler, "method_call")
        self._method_call = handler
        return handler

    def instance_created(
        self, handler: Optional[Callable[[CatchWrapper], Any]]
    ) -> Optional[Callable[[CatchWrapper], Any]]:
        """Set the hook called with each newly built wrapper."""
        if handler is not None:
            validate_handler(handler, "instance_created")
        self._instance_created = handler
        return handler

    def wrap(
        self, target: Any, method_call: Optional[DispatchFunction] = None
    ) -> CatchWrapper:
        """Wrap `target`; `method_call` overrides the factory default."""
        self._assert_target(target)
        if method_call is None:
            method_call = self._method_call
        wrapper = self._wrapper_type(target, method_call)
        if self._instance_created is not None:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Calling instance_created hook for %r", wrapper)
            self._instance_created(wrapper)
        return wrapper
