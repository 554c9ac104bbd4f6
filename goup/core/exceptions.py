"""
Centralized exception hierarchy for goup.

Every failure that can end a goup invocation is a GoupError. Lower layers wrap
library exceptions (requests, tarfile, json, OSError) in one of these so the
CLI has a single type to render.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class GoupError(Exception):
    """Base exception for all goup errors."""

    pass


class ConfigError(GoupError):
    """Raised when the goup configuration file is invalid."""

    pass


# ============================================================================
# Version Exceptions
# ============================================================================


class VersionParseError(GoupError, ValueError):
    """Raised when a string does not contain a Go version."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Unable to parse go version from '{text}'")


class VersionStateError(GoupError):
    """Base exception for precondition failures on a specific version."""

    def __init__(self, version, message: str):
        self.version = version
        super().__init__(message)


class NotAvailableError(VersionStateError):
    """Raised when a version has no download for this platform."""

    def __init__(self, version):
        super().__init__(version, f"Version {version} not available for download")


class NotInstalledError(VersionStateError):
    """Raised when an operation requires an installed version."""

    def __init__(self, version):
        super().__init__(version, f"Version {version} is not installed")


class PinnedError(VersionStateError):
    """Raised when attempting to remove a pinned version."""

    def __init__(self, version):
        super().__init__(version, f"Version {version} is pinned")


# ============================================================================
# Remote / Filesystem Exceptions
# ============================================================================


class CatalogError(GoupError):
    """Raised when the upstream catalog cannot be fetched or understood."""

    pass


class InstallError(GoupError):
    """Raised when downloading or unpacking an archive fails."""

    pass


class StateIOError(GoupError):
    """Raised when the state file or install root cannot be read or written."""

    pass
