"""
List command implementation.

Lists installed and available Go versions, newest first.
"""

import logging

from rich.text import Text

from goup.cli.utils import build_engine, console
from goup.toolchain.engine import VersionListing

logger = logging.getLogger(__name__)


def format_listing(entry: VersionListing) -> Text:
    """
    Render one version row.

    The bullet is '*' for the enabled version and 'i' for other installed
    versions. Installed versions are green while still available upstream,
    yellow once they are not, and red if that stale version is the enabled one.
    """
    if entry.enabled:
        bullet = "*"
    elif entry.installed:
        bullet = "i"
    else:
        bullet = " "
    pinned_text = " (PINNED)" if entry.pinned else ""

    if entry.installed and entry.available:
        style = "green"
    elif entry.installed and entry.enabled:
        style = "red"
    elif entry.installed:
        style = "yellow"
    else:
        style = ""

    return Text(f"{bullet} {entry.version}{pinned_text}", style=style)


def run(args) -> int:
    """
    Run the list command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    engine = build_engine(args)

    for entry in engine.list_versions():
        console.print(format_listing(entry), highlight=False)

    return 0
