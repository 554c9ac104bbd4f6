"""
State management for goup.

This module persists the record of which Go versions are installed, which one
is enabled and which are pinned. The record lives in ``<root>/versions.json``
and is the only state goup persists:

    {
      "enabled": "go1.21.3",
      "installed": ["go1.20.11", "go1.21.3"],
      "pinned": ["go1.20.11"]
    }

A missing file is equivalent to ``{}``. The file is always rewritten in full.

Example:
    >>> from goup.core.state import StateManager
    >>>
    >>> manager = StateManager(paths.state_file)
    >>> record = manager.load()
    >>> record.pinned.add(version)
    >>> manager.store(record)
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from goup.core.exceptions import StateIOError, VersionParseError
from goup.core.filesystem import atomic_write
from goup.core.version import GoVersion

logger = logging.getLogger(__name__)


@dataclass
class VersionFile:
    """
    The persisted installed/enabled/pinned record.

    Attributes:
        enabled: Version the 'go' symlink points at, if any
        installed: Versions unpacked under the goup root
        pinned: Versions protected from removal and cleaning
    """

    enabled: Optional[GoVersion] = None
    installed: set[GoVersion] = field(default_factory=set)
    pinned: set[GoVersion] = field(default_factory=set)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "enabled": str(self.enabled) if self.enabled is not None else None,
            "installed": [str(v) for v in sorted(self.installed)],
            "pinned": [str(v) for v in sorted(self.pinned)],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "VersionFile":
        """
        Build a record from its JSON form.

        Missing fields take their empty defaults.

        Raises:
            StateIOError: If the data does not have the expected shape
        """
        if not isinstance(data, dict):
            raise StateIOError("Unable to parse version file: expected a JSON object")

        try:
            enabled = data.get("enabled")
            return cls(
                enabled=_parse_version(enabled) if enabled is not None else None,
                installed=_parse_version_list(data.get("installed", []), "installed"),
                pinned=_parse_version_list(data.get("pinned", []), "pinned"),
            )
        except VersionParseError as e:
            raise StateIOError(f"Unable to parse version file: {e}") from e


def _parse_version(value) -> GoVersion:
    if not isinstance(value, str):
        raise StateIOError(f"Unable to parse version file: {value!r} is not a string")
    return GoVersion.parse(value)


def _parse_version_list(values, name: str) -> set[GoVersion]:
    if not isinstance(values, list):
        raise StateIOError(f"Unable to parse version file: '{name}' must be a list")
    return {_parse_version(v) for v in values}


class StateManager:
    """
    Loads and stores the goup state record.

    The manager only ever touches its one state file. It holds no cached
    state: each load reads the file again and each store rewrites it in full.

    Attributes:
        state_file: Path to versions.json
    """

    def __init__(self, state_file: Path):
        self.state_file = Path(state_file)

    def load(self) -> VersionFile:
        """
        Load the record from disk.

        Returns:
            The stored record, or an empty record if the file does not exist

        Raises:
            StateIOError: If the file cannot be read or parsed
        """
        try:
            with open(self.state_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.debug(f"State file not found, using empty state: {self.state_file}")
            return VersionFile()
        except json.JSONDecodeError as e:
            raise StateIOError(f"Unable to parse version file {self.state_file}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise StateIOError(f"Unable to read version file {self.state_file}: {e}") from e

        record = VersionFile.from_dict(data)
        logger.debug(f"Loaded state from {self.state_file}")
        return record

    def store(self, record: VersionFile) -> None:
        """
        Write the record to disk, replacing the previous file atomically.

        Raises:
            StateIOError: If the file cannot be written
        """
        json_content = json.dumps(record.to_dict(), indent=2) + "\n"

        try:
            atomic_write(self.state_file, json_content)
        except OSError as e:
            raise StateIOError(f"Unable to write version file {self.state_file}: {e}") from e

        logger.debug(f"Saved state to {self.state_file}")
