from ._version import __version__, get_version_info
from .api import is_wrapper, unwrap, wrap, wrap_catch, wrap_fake, wrap_proxy, wrap_track
from .base import Wrapper
from .catch import CatchFactory, CatchWrapper
from .config import Mode, WrapOptions, normalize_options
from .factory import WrapperFactory
from .fake import NATIVE_PREFIX
from .operations import (
    EXCLUDED_OPERATIONS,
    INPLACE_OPERATIONS,
    SPECIAL_OPERATIONS,
    discover_operations,
)
from .proxy import ProxyFactory, ProxyWrapper
from .registry import HandlerKey, HandlerRegistry, Phase
from .track import TrackFactory, TrackWrapper
from .utils import (
    HandlerResultError,
    RegistryError,
    ReservedNameError,
    ValidationError,
    WrapError,
)

__all__ = [
    "wrap",
    "wrap_proxy",
    "wrap_track",
    "wrap_fake",
    "wrap_catch",
    "is_wrapper",
    "unwrap",
    "Mode",
    "WrapOptions",
    "normalize_options",
    "Wrapper",
    "WrapperFactory",
    "ProxyWrapper",
    "ProxyFactory",
    "TrackWrapper",
    "TrackFactory",
    "CatchWrapper",
    "CatchFactory",
    "NATIVE_PREFIX",
    "HandlerKey",
    "HandlerRegistry",
    "Phase",
    "SPECIAL_OPERATIONS",
    "EXCLUDED_OPERATIONS",
    "INPLACE_OPERATIONS",
    "discover_operations",
    "ValidationError",
    "WrapError",
    "ReservedNameError",
    "RegistryError",
    "HandlerResultError",
    "get_version_info",
    "__version__",
]
