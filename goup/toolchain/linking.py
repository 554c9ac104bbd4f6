"""
Activation symlink management.

The enabled Go version is the one the ``<root>/go`` symlink points at. The
shell setup exports that path as GOROOT, so swapping the link switches the
toolchain for every new shell and build.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from goup.core.directory import GoupPaths
from goup.core.exceptions import StateIOError
from goup.core.version import GoVersion

logger = logging.getLogger(__name__)


class ActivationLink:
    """Manages the symlink that selects the active Go installation."""

    def __init__(self, paths: GoupPaths):
        self.paths = paths

    @property
    def link_path(self) -> Path:
        return self.paths.link_path

    def activate(self, version: GoVersion) -> Path:
        """
        Point the activation link at a version's 'go' directory.

        Any existing link is removed first; a missing link is fine.

        Returns:
            The link target

        Raises:
            StateIOError: If the old link cannot be removed or the new one
                cannot be created
        """
        self.remove()

        target = self.paths.goroot(version)
        try:
            os.symlink(target, self.link_path, target_is_directory=True)
        except OSError as e:
            raise StateIOError(f"Unable to make symlink {self.link_path}: {e}") from e

        logger.debug(f"Created symlink: {self.link_path} -> {target}")
        return target

    def remove(self) -> bool:
        """
        Remove the activation link.

        Returns:
            True if a link was removed, False if there was none

        Raises:
            StateIOError: If removal fails for any reason other than absence
        """
        try:
            os.remove(self.link_path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StateIOError(f"Unable to remove {self.link_path}: {e}") from e

        logger.debug(f"Removed symlink: {self.link_path}")
        return True

    def target(self) -> Optional[Path]:
        """Where the link points, or None if there is no link."""
        if not self.link_path.is_symlink():
            return None
        return Path(os.readlink(self.link_path))

    def points_to(self, version: GoVersion) -> bool:
        """Whether the link currently targets the given version."""
        return self.target() == self.paths.goroot(version)
