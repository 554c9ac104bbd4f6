"""
Install command implementation.

Downloads and unpacks a version of Go without enabling it.
"""

import logging

from goup.cli.utils import build_engine, progress_sink_for, say

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments with version field

    Returns:
        Exit code (0 for success)
    """
    engine = build_engine(args, progress_sink=progress_sink_for(args))

    if engine.install(args.version):
        say(args, f"{args.version} installed successfully")
    else:
        say(args, f"{args.version} is already installed")
    say(args, f"Use 'goup enable {args.version}' to start using it")
    return 0
