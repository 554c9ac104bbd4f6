"""
Toolchain management module for goup.

This module provides functionality for:
- Fetching the Go release catalog
- Downloading and unpacking release archives
- Switching the active version
- Installing, removing, pinning and cleaning versions
"""

from goup.toolchain.catalog import CatalogClient, FileInfo
from goup.toolchain.engine import (
    CleanResult,
    UpdateResult,
    VersionEngine,
    VersionListing,
)
from goup.toolchain.installer import ArchiveInstaller
from goup.toolchain.linking import ActivationLink

__all__ = [
    "CatalogClient",
    "FileInfo",
    "ArchiveInstaller",
    "ActivationLink",
    "VersionEngine",
    "VersionListing",
    "UpdateResult",
    "CleanResult",
]
