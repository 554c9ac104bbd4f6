"""
Platform detection for goup.

This module translates the running host's operating system and CPU
architecture into the tags used by the Go download catalog (e.g. 'linux' /
'amd64', 'darwin' / 'arm64'), so the catalog client can select the archive
built for this machine.

Hosts that have no Go equivalent map to the UNKNOWN sentinel, which never
matches a catalog entry.

Usage:
    from goup.core.platform import detect_platform

    platform_info = detect_platform()
    print(f"Looking for {platform_info.os}-{platform_info.arch} archives")
"""

import functools
import logging
import platform
from dataclasses import dataclass

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"

# platform.machine() values -> Go GOARCH names
ARCH_TAGS = {
    "x86": "386",
    "i386": "386",
    "i686": "386",
    "x86_64": "amd64",
    "amd64": "amd64",
    "arm": "arm",
    "armv7l": "arm",
    "armv6l": "armv6l",
    "aarch64": "arm64",
    "arm64": "arm64",
    "loongarch64": "loong64",
    "mips": "mips",
    "mips64": "mips64",
    "ppc64": "ppc64",
    "ppc64le": "ppc64le",
    "riscv64": "riscv64",
    "s390x": "s390x",
}

# platform.system() values -> Go GOOS names
OS_TAGS = {
    "aix": "aix",
    "darwin": "darwin",
    "dragonfly": "dragonfly",
    "freebsd": "freebsd",
    "illumos": "illumos",
    "linux": "linux",
    "netbsd": "netbsd",
    "openbsd": "openbsd",
    "sunos": "solaris",
    "solaris": "solaris",
    "windows": "windows",
}


@dataclass(frozen=True)
class PlatformInfo:
    """
    Host platform expressed in the Go catalog's vocabulary.

    Attributes:
        os: Go OS tag ('linux', 'darwin', ...) or 'unknown'
        arch: Go architecture tag ('amd64', 'arm64', ...) or 'unknown'
    """

    os: str
    arch: str

    @property
    def is_supported(self) -> bool:
        """Whether both tags have a Go equivalent."""
        return self.os != UNKNOWN and self.arch != UNKNOWN

    def platform_string(self) -> str:
        """
        Get the platform string used in Go archive names.

        Example:
            >>> PlatformInfo('linux', 'amd64').platform_string()
            'linux-amd64'
        """
        return f"{self.os}-{self.arch}"

    def __str__(self) -> str:
        return self.platform_string()


def go_arch(machine: str) -> str:
    """Map a platform.machine() value to a Go architecture tag."""
    return ARCH_TAGS.get(machine.lower(), UNKNOWN)


def go_os(system: str) -> str:
    """Map a platform.system() value to a Go OS tag."""
    return OS_TAGS.get(system.lower(), UNKNOWN)


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect the current platform.

    This function is cached - it only runs detection once per process.

    Returns:
        PlatformInfo for the running host
    """
    info = PlatformInfo(os=go_os(platform.system()), arch=go_arch(platform.machine()))
    if not info.is_supported:
        logger.debug(
            f"Host platform {platform.system()}/{platform.machine()} "
            f"has no Go equivalent, detected as {info}"
        )
    return info


def clear_platform_cache():
    """
    Clear the platform detection cache.

    This forces the next call to detect_platform() to re-detect.
    """
    detect_platform.cache_clear()


__all__ = [
    "UNKNOWN",
    "PlatformInfo",
    "detect_platform",
    "go_arch",
    "go_os",
    "clear_platform_cache",
]
