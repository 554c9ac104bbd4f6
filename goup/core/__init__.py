"""
Core functionality for goup.

This package contains the foundational modules that other components depend on.
"""

from .directory import GoupPaths, get_goup_dir
from .exceptions import (
    GoupError,
    ConfigError,
    VersionParseError,
    VersionStateError,
    NotAvailableError,
    NotInstalledError,
    PinnedError,
    CatalogError,
    InstallError,
    StateIOError,
)
from .platform import PlatformInfo, detect_platform, clear_platform_cache
from .state import StateManager, VersionFile
from .version import GoVersion

__all__ = [
    # Directory
    "GoupPaths",
    "get_goup_dir",
    # Exceptions
    "GoupError",
    "ConfigError",
    "VersionParseError",
    "VersionStateError",
    "NotAvailableError",
    "NotInstalledError",
    "PinnedError",
    "CatalogError",
    "InstallError",
    "StateIOError",
    # Platform
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
    # State
    "StateManager",
    "VersionFile",
    # Version
    "GoVersion",
]
