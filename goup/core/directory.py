"""
Directory structure management for goup.

This module resolves the goup root directory and the fixed locations inside
it. Everything goup owns lives directly under the root:

Directory Structure:
    <root>/ ($GOUP_DIR, $GOPATH/goup or ~/.go/goup):
        - versions.json : Installed/enabled/pinned state record
        - config.yaml   : Optional user configuration
        - env           : Shell setup script (written by 'goup env --write')
        - go            : Symlink to the enabled version's 'go' directory
        - go1.21.3/     : One directory per installed version
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from goup.core.version import GoVersion

logger = logging.getLogger(__name__)

STATE_FILE_NAME = "versions.json"
CONFIG_FILE_NAME = "config.yaml"
ENV_FILE_NAME = "env"
LINK_NAME = "go"


def get_goup_dir(
    override: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None
) -> Path:
    """
    Resolve the goup root directory.

    Resolution order:
        1. Explicit override (the --root flag)
        2. $GOUP_DIR
        3. $GOPATH/goup
        4. ~/.go/goup

    Args:
        override: Explicit root directory
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Absolute path of the root directory (not created)

    Example:
        >>> get_goup_dir(environ={"GOPATH": "/home/user/go"})
        PosixPath('/home/user/go/goup')
    """
    if environ is None:
        environ = os.environ

    if override is not None:
        root = Path(override)
    elif environ.get("GOUP_DIR"):
        root = Path(environ["GOUP_DIR"])
    elif environ.get("GOPATH"):
        root = Path(environ["GOPATH"]) / "goup"
    else:
        root = Path.home() / ".go" / "goup"

    root = root.expanduser().absolute()
    logger.debug(f"Using goup directory: {root}")
    return root


@dataclass(frozen=True)
class GoupPaths:
    """
    Fixed locations under a goup root directory.

    Attributes:
        root: The goup root directory
    """

    root: Path

    @property
    def state_file(self) -> Path:
        return self.root / STATE_FILE_NAME

    @property
    def config_file(self) -> Path:
        return self.root / CONFIG_FILE_NAME

    @property
    def env_file(self) -> Path:
        return self.root / ENV_FILE_NAME

    @property
    def link_path(self) -> Path:
        """The activation symlink; also the GOROOT handed to the shell."""
        return self.root / LINK_NAME

    def install_dir(self, version: GoVersion) -> Path:
        """Directory the given version is unpacked into."""
        return self.root / str(version)

    def goroot(self, version: GoVersion) -> Path:
        """The 'go' directory inside an installed version (the symlink target)."""
        return self.install_dir(version) / "go"

    def ensure_root(self) -> Path:
        """Create the root directory if needed."""
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root
