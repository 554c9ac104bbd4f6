"""
Go release catalog client.

The Go download site publishes its releases as JSON
(https://go.dev/dl/?mode=json): a list of release groups, each with a version
tag and one entry per downloadable file. This module fetches that list and
keeps, for every release, the single archive built for the running platform.

Only the fields goup reads are represented; everything else in the catalog
is ignored.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from goup.core.config import DEFAULT_CATALOG_URL
from goup.core.exceptions import CatalogError, VersionParseError
from goup.core.platform import PlatformInfo, detect_platform
from goup.core.version import GoVersion

logger = logging.getLogger(__name__)

ARCHIVE_KIND = "archive"


@dataclass(frozen=True)
class FileInfo:
    """Download metadata for one catalog file entry."""

    filename: str
    """Archive file name, relative to the download URL"""

    os: str
    """Go OS tag the archive was built for"""

    arch: str
    """Go architecture tag the archive was built for"""

    size: int
    """Archive size in bytes"""

    kind: str
    """'archive', 'installer' or 'source'"""

    @classmethod
    def from_dict(cls, data: dict) -> "FileInfo":
        """
        Project a catalog file entry onto the fields goup uses.

        Raises:
            CatalogError: If a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise CatalogError(f"Unexpected file entry in catalog: {data!r}")

        try:
            info = cls(
                filename=data["filename"],
                os=data["os"],
                arch=data["arch"],
                size=data["size"],
                kind=data["kind"],
            )
        except KeyError as e:
            raise CatalogError(f"Catalog file entry is missing field {e}") from e

        for name in ("filename", "os", "arch", "kind"):
            if not isinstance(getattr(info, name), str):
                raise CatalogError(f"Catalog field '{name}' must be a string")
        if isinstance(info.size, bool) or not isinstance(info.size, int):
            raise CatalogError("Catalog field 'size' must be an integer")

        return info

    def matches(self, platform: PlatformInfo) -> bool:
        """Whether this is the full archive for the given platform."""
        return (
            self.os == platform.os
            and self.arch == platform.arch
            and self.kind == ARCHIVE_KIND
        )


class CatalogClient:
    """
    Fetches the versions of Go available for this platform.

    Example:
        >>> client = CatalogClient()
        >>> available = client.fetch_available()
        >>> for version in reversed(available):
        ...     print(version)
    """

    def __init__(
        self,
        catalog_url: str = DEFAULT_CATALOG_URL,
        platform: Optional[PlatformInfo] = None,
        timeout: float = 30,
    ):
        """
        Initialize catalog client.

        Args:
            catalog_url: URL of the JSON release list
            platform: Platform to select archives for (auto-detected if None)
            timeout: Request timeout in seconds
        """
        self.catalog_url = catalog_url
        self.platform = platform or detect_platform()
        self.timeout = timeout

    def fetch_available(self, require_nonempty: bool = False) -> dict[GoVersion, FileInfo]:
        """
        Get the versions that have an archive for this platform.

        Args:
            require_nonempty: Treat an empty result as an error

        Returns:
            Mapping of version to archive metadata, ordered oldest first

        Raises:
            CatalogError: If the request fails, the response is not a valid
                catalog, or the result is empty and require_nonempty is set
        """
        logger.debug(f"Fetching release catalog from {self.catalog_url}")

        try:
            response = requests.get(self.catalog_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise CatalogError(
                f"Unable to query {self.catalog_url} for current go versions: {e}"
            ) from e

        try:
            releases = response.json()
        except ValueError as e:
            raise CatalogError(f"Unable to parse version info from remote: {e}") from e

        available = self._select_archives(releases)

        if require_nonempty and not available:
            raise CatalogError(
                f"No versions found for target ({self.platform.arch}, {self.platform.os})"
            )

        logger.debug(f"{len(available)} versions available for {self.platform}")
        return available

    def latest(self) -> tuple[GoVersion, FileInfo]:
        """
        Get the newest available version.

        Raises:
            CatalogError: If the catalog cannot be fetched or is empty
        """
        available = self.fetch_available(require_nonempty=True)
        version = max(available)
        return version, available[version]

    def _select_archives(self, releases) -> dict[GoVersion, FileInfo]:
        """Pick the matching archive out of every release group."""
        if not isinstance(releases, list):
            raise CatalogError("Unable to parse version info from remote: expected a list")

        selected = {}
        for group in releases:
            if not isinstance(group, dict) or "version" not in group:
                raise CatalogError(f"Unexpected release entry in catalog: {group!r}")

            if group.get("stable") is False:
                logger.debug(f"Skipping unstable release {group['version']}")
                continue

            try:
                version = GoVersion.parse(str(group["version"]))
            except VersionParseError as e:
                raise CatalogError(f"Unable to parse version info from remote: {e}") from e

            files = group.get("files")
            if not isinstance(files, list):
                raise CatalogError(f"Release {version} has no file list")

            for entry in files:
                file_info = FileInfo.from_dict(entry)
                if file_info.matches(self.platform):
                    selected[version] = file_info
                    break

        return dict(sorted(selected.items()))
