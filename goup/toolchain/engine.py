"""
Go version engine.

This module implements every goup operation on top of the state record, the
release catalog, the archive installer and the activation link. Each
operation loads the record, checks its preconditions, acts on the filesystem
and stores the record once at the end:

- install / update download new versions
- enable swaps the activation symlink
- remove / pin / unpin edit the installed and pinned sets
- clean reconciles the record with the install root and the catalog

The record invariants (pinned versions are installed, the enabled version is
installed) hold after every successful operation.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from goup.core.config import GoupConfig
from goup.core.directory import GoupPaths
from goup.core.download import ProgressSink
from goup.core.exceptions import (
    CatalogError,
    NotAvailableError,
    NotInstalledError,
    PinnedError,
    StateIOError,
    VersionParseError,
)
from goup.core.filesystem import safe_rmtree
from goup.core.state import StateManager, VersionFile
from goup.core.version import GoVersion
from goup.toolchain.catalog import CatalogClient
from goup.toolchain.installer import ArchiveInstaller
from goup.toolchain.linking import ActivationLink

logger = logging.getLogger(__name__)


@dataclass
class VersionListing:
    """One row of 'goup list'."""

    version: GoVersion
    installed: bool
    available: bool
    enabled: bool
    pinned: bool


@dataclass
class UpdateResult:
    """Result of update operation."""

    version: GoVersion
    """Latest available version, now enabled"""

    was_installed: bool
    """Whether the latest version was already installed"""

    previous: Optional[GoVersion]
    """Version enabled before the update, for rolling back"""


@dataclass
class CleanResult:
    """Result of clean operation."""

    removed: list[GoVersion] = field(default_factory=list)
    """Version directories deleted (or that would be, in a dry run)"""

    missing: list[GoVersion] = field(default_factory=list)
    """Recorded as installed but absent from disk"""

    dropped_pins: list[GoVersion] = field(default_factory=list)
    """Pins on versions that are no longer installed"""

    kept: list[GoVersion] = field(default_factory=list)
    """Version directories left in place"""

    dry_run: bool = False


class VersionEngine:
    """
    Orchestrates installing, enabling, removing, pinning and cleaning versions.

    Example:
        >>> engine = VersionEngine.from_config(GoupPaths(root), GoupConfig())
        >>> engine.install(GoVersion.parse("go1.21.3"))
        >>> engine.enable(GoVersion.parse("go1.21.3"))
    """

    def __init__(
        self,
        paths: GoupPaths,
        state_manager: Optional[StateManager] = None,
        catalog: Optional[CatalogClient] = None,
        installer: Optional[ArchiveInstaller] = None,
        link: Optional[ActivationLink] = None,
    ):
        """
        Initialize version engine.

        Args:
            paths: Layout of the goup root
            state_manager: State store (defaults to <root>/versions.json)
            catalog: Release catalog client (defaults to go.dev)
            installer: Archive installer (defaults to go.dev downloads)
            link: Activation link manager
        """
        self.paths = paths
        self.state = state_manager or StateManager(paths.state_file)
        self.catalog = catalog or CatalogClient()
        self.installer = installer or ArchiveInstaller(paths)
        self.link = link or ActivationLink(paths)

    @classmethod
    def from_config(
        cls,
        paths: GoupPaths,
        config: GoupConfig,
        progress_sink: Optional[ProgressSink] = None,
    ) -> "VersionEngine":
        """Build an engine wired to the configured catalog and download site."""
        return cls(
            paths,
            catalog=CatalogClient(config.catalog_url, timeout=config.timeout),
            installer=ArchiveInstaller(
                paths, download_url=config.download_url, progress_sink=progress_sink
            ),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_versions(self) -> list[VersionListing]:
        """
        List installed and available versions, newest first.

        The catalog is optional here: when it is empty or unreachable only
        installed versions are listed.
        """
        record = self.state.load()

        try:
            available = set(self.catalog.fetch_available())
        except CatalogError as e:
            logger.warning(f"Listing installed versions only: {e}")
            available = set()

        return [
            VersionListing(
                version=v,
                installed=v in record.installed,
                available=v in available,
                enabled=v == record.enabled,
                pinned=v in record.pinned,
            )
            for v in sorted(record.installed | available, reverse=True)
        ]

    def current(self) -> Optional[GoVersion]:
        """The enabled version, if any."""
        return self.state.load().enabled

    def version_folders(self) -> set[GoVersion]:
        """
        Versions that have an install directory under the root.

        Only directories named exactly by a version's canonical form count;
        the activation link and any other files are ignored.

        Raises:
            StateIOError: If the root cannot be listed
        """
        if not self.paths.root.exists():
            return set()

        versions = set()
        try:
            for entry in self.paths.root.iterdir():
                if entry.is_symlink() or not entry.is_dir():
                    continue
                try:
                    version = GoVersion.parse(entry.name)
                except VersionParseError:
                    continue
                if str(version) == entry.name:
                    versions.add(version)
        except OSError as e:
            raise StateIOError(f"Unable to list {self.paths.root}: {e}") from e

        return versions

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def install(self, version: GoVersion) -> bool:
        """
        Install a version.

        Installing a version that is already installed is not an error and
        makes no network request.

        Returns:
            True if an archive was downloaded, False if already installed

        Raises:
            NotAvailableError: If the catalog has no archive for this platform
            CatalogError: If the catalog cannot be fetched
            InstallError: If download or extraction fails
            StateIOError: If the state file cannot be read or written
        """
        record = self.state.load()

        if self._is_fully_installed(record, version):
            logger.debug(f"{version} is already installed")
            return False

        file_info = self.catalog.fetch_available().get(version)
        if file_info is None:
            raise NotAvailableError(version)

        record.installed.add(version)
        self.installer.install_archive(version, file_info)
        self.state.store(record)

        logger.info(f"Installed {version}")
        return True

    def enable(self, version: GoVersion) -> None:
        """
        Make an installed version the active one.

        The state record is only written once the symlink is in place.

        Raises:
            NotInstalledError: If the version is not installed
            StateIOError: If the symlink cannot be replaced or the record stored
        """
        record = self.state.load()
        if version not in record.installed:
            raise NotInstalledError(version)

        self.link.activate(version)
        record.enabled = version
        self.state.store(record)

        logger.info(f"Enabled {version}")

    def update(self) -> UpdateResult:
        """
        Install (if needed) and enable the newest available version.

        Raises:
            CatalogError: If the catalog cannot be fetched or lists no versions
            InstallError: If download or extraction fails
            StateIOError: If the state file or symlink cannot be written
        """
        record = self.state.load()
        latest, file_info = self.catalog.latest()
        previous = record.enabled

        was_installed = self._is_fully_installed(record, latest)
        if not was_installed:
            logger.info(f"Version {latest} is available")
            record.installed.add(latest)
            self.installer.install_archive(latest, file_info)
            self.state.store(record)

        self.enable(latest)
        return UpdateResult(version=latest, was_installed=was_installed, previous=previous)

    def remove(self, version: GoVersion) -> bool:
        """
        Uninstall a version.

        Returns:
            True if the removed version was the enabled one (nothing is
            enabled afterwards)

        Raises:
            NotInstalledError: If the version is not installed
            PinnedError: If the version is pinned
            StateIOError: If the directory cannot be deleted or the record stored
        """
        record = self.state.load()
        if version not in record.installed:
            raise NotInstalledError(version)
        if version in record.pinned:
            raise PinnedError(version)

        safe_rmtree(self.paths.install_dir(version), require_prefix=self.paths.root)

        was_enabled = record.enabled == version
        if was_enabled:
            record.enabled = None
            if self.link.points_to(version):
                self.link.remove()

        record.installed.discard(version)
        self.state.store(record)

        logger.info(f"Removed {version}")
        return was_enabled

    def pin(self, version: GoVersion) -> None:
        """
        Protect an installed version from remove and clean.

        Raises:
            NotInstalledError: If the version is not installed
        """
        record = self.state.load()
        if version not in record.installed:
            raise NotInstalledError(version)

        record.pinned.add(version)
        self.state.store(record)

    def unpin(self, version: GoVersion) -> None:
        """Remove a pin. Unpinning a version that is not pinned is a no-op."""
        record = self.state.load()
        record.pinned.discard(version)
        self.state.store(record)

    def clean(self, dry_run: bool = False) -> CleanResult:
        """
        Remove versions that are no longer available upstream.

        Runs in four steps:
            1. Drop recorded versions whose directory is gone
            2. Drop pins on versions that are no longer installed
            3. Keep anything available upstream, pinned or enabled
            4. Delete every other version directory

        Version directories that are kept but were never recorded as
        installed stay untracked, the enabled one included. The enabled
        version is only forgotten when its directory is gone. The record is stored once, after all
        deletions; if a deletion fails the error propagates and the record
        is not stored.

        Args:
            dry_run: Compute what would be removed without changing anything

        Raises:
            CatalogError: If the catalog cannot be fetched
            StateIOError: If a directory cannot be deleted or the record stored
        """
        record = self.state.load()
        folders = self.version_folders()
        result = CleanResult(dry_run=dry_run)

        result.missing = sorted(record.installed - folders)
        record.installed &= folders

        result.dropped_pins = sorted(record.pinned - record.installed)
        record.pinned &= record.installed

        allowlist = set(self.catalog.fetch_available()) | record.pinned
        if record.enabled is not None:
            allowlist.add(record.enabled)

        result.removed = sorted(folders - allowlist)
        result.kept = sorted(folders & allowlist)

        if dry_run:
            return result

        for version in result.removed:
            safe_rmtree(self.paths.install_dir(version), require_prefix=self.paths.root)
            record.installed.discard(version)
            logger.info(f"Removed {version}")

        if record.enabled is not None and record.enabled not in folders:
            logger.warning(f"Enabled version {record.enabled} is no longer installed")
            record.enabled = None

        self.state.store(record)
        return result

    def _is_fully_installed(self, record: VersionFile, version: GoVersion) -> bool:
        return version in record.installed and self.paths.install_dir(version).is_dir()
