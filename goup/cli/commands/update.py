"""
Update command implementation.

Installs and enables the latest version of Go.
"""

import logging

from goup.cli.utils import build_engine, progress_sink_for, say

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the update command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    engine = build_engine(args, progress_sink=progress_sink_for(args))
    result = engine.update()

    if result.was_installed:
        say(args, f"The latest version is {result.version}")
        say(args, "Already up to date!")
        return 0

    say(args, f"Installed and enabled version {result.version}")
    if result.previous is not None:
        say(
            args,
            f"Use 'goup clean' to remove old versions, "
            f"or 'goup enable {result.previous}' to roll back",
        )
    else:
        say(args, "Use 'goup clean' to remove old versions")
    return 0
