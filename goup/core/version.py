"""
Go version identifiers.

A GoVersion is the (major, minor, patch) triple of a Go release. Its canonical
text form ``go<major>.<minor>.<patch>`` is used both for display and as the
name of the version's install directory, so parsing and formatting must
round-trip exactly.

Example:
    >>> from goup.core.version import GoVersion
    >>> v = GoVersion.parse("go version go1.21 linux/amd64")
    >>> str(v)
    'go1.21.0'
    >>> GoVersion.parse("go1.9") < GoVersion.parse("go1.10")
    True
"""

import re
from dataclasses import dataclass

from goup.core.exceptions import VersionParseError

PARSING_REGEX = re.compile(r"go(\d+)\.(\d+)(?:\.(\d+))?")


@dataclass(frozen=True, order=True)
class GoVersion:
    """
    A Go release version.

    Ordering is numeric on (major, minor, patch), so go1.9.0 < go1.10.0.
    Instances are immutable and hashable, and can be used in sets and as
    mapping keys.

    Attributes:
        major: Major version number
        minor: Minor version number
        patch: Patch version number (0 when the source omitted it)
    """

    major: int = 0
    minor: int = 0
    patch: int = 0

    def __post_init__(self):
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer: {value!r}")

    @classmethod
    def parse(cls, text: str) -> "GoVersion":
        """
        Extract the first Go version found in a string.

        Surrounding text is ignored, so this works on canonical names
        ("go1.21.3"), shortened forms ("go1.21") and longer strings such as
        compiler banners or archive filenames.

        Args:
            text: String containing a version

        Returns:
            Parsed version

        Raises:
            VersionParseError: If no version is found in the string
        """
        match = PARSING_REGEX.search(text)
        if match is None:
            raise VersionParseError(text)

        major, minor, patch = match.groups()
        return cls(int(major), int(minor), int(patch) if patch is not None else 0)

    def __str__(self) -> str:
        return f"go{self.major}.{self.minor}.{self.patch}"
