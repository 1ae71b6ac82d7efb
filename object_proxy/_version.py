"""Version and system information for object-proxy.

Usage:
    from object_proxy import __version__, get_version_info

    print(__version__)  # "0.3.0"
    info = get_version_info()  # for bug reports
"""

from __future__ import annotations

import importlib
import importlib.util
import platform
import sys
from typing import Any, Dict, Optional

VERSION_MAJOR = 0
VERSION_MINOR = 3
VERSION_PATCH = 0
VERSION_SUFFIX = ""  # e.g., "alpha", "beta", "rc1"

__version__ = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}{'-' + VERSION_SUFFIX if VERSION_SUFFIX else ''}"


def get_version() -> str:
    """Get the version string.

    Returns:
        Version string in format "X.Y.Z" or "X.Y.Z-suffix".
    """
    if VERSION_SUFFIX:
        return f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}-{VERSION_SUFFIX}"
    return f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"


def get_python_info() -> Dict[str, str]:
    """Get Python interpreter information."""
    return {
        "version": platform.python_version(),
        "implementation": platform.python_implementation(),
        "executable": sys.executable,
    }


def get_platform_info() -> Dict[str, str]:
    """Get platform/OS information."""
    return {
        "system": platform.system(),
        "release": platform.release(),
        "machine": platform.machine(),
    }


def _get_package_version(
    module_name: str, package_name: Optional[str] = None
) -> Optional[str]:
    """Get package version, trying __version__ first, then distribution metadata.

    Args:
        module_name: Name of the module to import.
        package_name: Distribution name (defaults to module_name).

    Returns:
        Version string or None if not installed.
    """
    if importlib.util.find_spec(module_name) is None:
        return None

    module = importlib.import_module(module_name)
    version = getattr(module, "__version__", None) or getattr(module, "VERSION", None)
    if version:
        return str(version)

    from importlib import metadata

    try:
        return metadata.version(package_name or module_name)
    except metadata.PackageNotFoundError:
        return None


def get_dependency_versions() -> Dict[str, Optional[str]]:
    """Get versions of runtime dependencies."""
    return {
        "pydantic": _get_package_version("pydantic"),
        "typing_extensions": _get_package_version(
            "typing_extensions", "typing-extensions"
        ),
    }


def get_version_info() -> Dict[str, Any]:
    """Get version and system information.

    Example:
        >>> info = get_version_info()
        >>> info["object_proxy"]
        '0.3.0'
    """
    return {
        "object_proxy": __version__,
        "python": get_python_info(),
        "platform": get_platform_info(),
        "dependencies": get_dependency_versions(),
    }


def get_debug_info() -> str:
    """Compact single-line debug string for error reports.

    Example:
        >>> get_debug_info()
        'object-proxy=0.3.0 python=3.11.5 pydantic=2.5.0 platform=Linux'
    """
    info = get_version_info()
    parts = [
        f"object-proxy={info['object_proxy']}",
        f"python={info['python']['version']}",
    ]
    if info["dependencies"].get("pydantic"):
        parts.append(f"pydantic={info['dependencies']['pydantic']}")
    parts.append(f"platform={info['platform']['system']}")
    return " ".join(parts)
