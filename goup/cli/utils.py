"""
Shared utilities for CLI commands.

Provides engine construction, argument types and output helpers used across
the goup subcommands.
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TransferSpeedColumn,
)

from goup.core.config import load_config, resolve_config_path
from goup.core.directory import GoupPaths, get_goup_dir
from goup.core.download import NullProgressSink, ProgressSink
from goup.core.exceptions import VersionParseError
from goup.core.version import GoVersion
from goup.toolchain.engine import VersionEngine

logger = logging.getLogger(__name__)

console = Console()


# ============================================================================
# Argument Types
# ============================================================================


def version_argument(text: str) -> GoVersion:
    """
    argparse type for version arguments.

    Unparsable versions become usage errors before any command runs.

    Example:
        >>> version_argument("go1.21")
        GoVersion(major=1, minor=21, patch=0)
    """
    try:
        return GoVersion.parse(text)
    except VersionParseError as e:
        raise argparse.ArgumentTypeError(f"{e} (expected e.g. go1.21.3)") from e


# ============================================================================
# Engine Construction
# ============================================================================


def get_paths(args) -> GoupPaths:
    """Resolve the goup root from --root and the environment."""
    return GoupPaths(get_goup_dir(getattr(args, "root", None)))


def build_engine(args, progress_sink: Optional[ProgressSink] = None) -> VersionEngine:
    """
    Create a version engine for the parsed command-line arguments.

    Args:
        args: Parsed arguments with root and config fields
        progress_sink: Receives archive download progress

    Raises:
        ConfigError: If the configuration file is invalid
    """
    paths = get_paths(args)
    explicit_config = getattr(args, "config", None)
    config = load_config(
        resolve_config_path(paths.root, explicit_config),
        required=explicit_config is not None,
    )
    return VersionEngine.from_config(paths, config, progress_sink=progress_sink)


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


class RichProgressSink:
    """Renders archive download progress as a rich progress bar."""

    def __init__(self, output: Optional[Console] = None):
        self.console = output or console
        self._progress: Optional[Progress] = None
        self._task: Optional[TaskID] = None

    def start(self, total_bytes: int, description: str = "") -> None:
        self._progress = Progress(
            TextColumn("{task.description}"),
            BarColumn(bar_width=40),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeElapsedColumn(),
            console=self.console,
        )
        self._task = self._progress.add_task(description, total=total_bytes or None)
        self._progress.start()

    def advance(self, num_bytes: int) -> None:
        if self._progress is not None:
            self._progress.update(self._task, advance=num_bytes)

    def finish(self) -> None:
        if self._progress is not None:
            task = self._progress.tasks[0]
            self._progress.update(self._task, completed=task.total or task.completed)
            self._stop()

    def abandon(self) -> None:
        self._stop()

    def _stop(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None


def progress_sink_for(args) -> ProgressSink:
    """Progress bar unless --quiet was given."""
    if getattr(args, "quiet", False):
        return NullProgressSink()
    return RichProgressSink()


def say(args, message: str):
    """Print a confirmation message unless --quiet was given."""
    if not getattr(args, "quiet", False):
        print(message)


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"Error: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)
