r"""Wrap options and mode selection.

This module provides:
  - `Mode`: the four wrapper modes (proxy, track, fake, catch)
  - `WrapOptions`: Pydantic model for the options of a wrap request
  - `normalize_options`: Normalize a raw dict into a validated `WrapOptions`

Option fields:
  - mode: Mode - which dispatch policy the wrapper uses
  - omit: tuple - operation names left untouched (real implementation exposed)
  - include_special: bool - whether dunder operator methods are intercepted
  - method_call: callable - catch mode default dispatch function
  - customize: callable - fake mode hook receiving the new class
  - overrides: dict - fake mode replacement implementations by name
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

__all__ = [
    "Mode",
    "WrapOptions",
    "normalize_options",
]


class Mode(str, Enum):
    """Dispatch policy of a wrapper."""

    PROXY = "proxy"
    TRACK = "track"
    FAKE = "fake"
    CATCH = "catch"


class WrapOptions(BaseModel):
    """Options of a single wrap request.

    The model is frozen; derive variants with ``model_copy(update=...)``.
    """

    model_config = ConfigDict(
        extra="forbid", frozen=True, arbitrary_types_allowed=True
    )

    mode: Mode = Mode.PROXY
    omit: Tuple[str, ...] = ()
    include_special: bool = True
    method_call: Optional[Callable[..., Any]] = None
    customize: Optional[Callable[..., Any]] = None
    overrides: Dict[str, Callable[..., Any]] = Field(default_factory=dict)

    @field_validator("omit", mode="before")
    @classmethod
    def coerce_omit(cls, value: Any) -> Any:
        """Accept a bare string or any iterable of names."""
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return tuple(value)


def normalize_options(
    options: Union[Dict[str, Any], WrapOptions, None] = None,
    **fields: Any,
) -> WrapOptions:
    """Normalize a raw dict or `WrapOptions` into a validated `WrapOptions`.

    Args:
        options: Raw options dict, a `WrapOptions` instance, or None.
        **fields: Individual fields merged over `options`.

    Returns:
        Validated `WrapOptions` instance.

    Raises:
        pydantic.ValidationError: If the merged options don't match the schema.
    """
    if isinstance(options, WrapOptions):
        if not fields:
            return options
        data = {
            name: getattr(options, name) for name in WrapOptions.model_fields
        }
    else:
        data = dict(options or {})
    data.update(fields)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Normalizing wrap options: %s", sorted(data))
    return WrapOptions.model_validate(data)
