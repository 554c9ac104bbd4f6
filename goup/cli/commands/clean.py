"""
Clean command implementation.

Removes versions that are no longer available from the download site,
keeping pinned and enabled versions.
"""

import logging

from goup.cli.utils import build_engine, say

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the clean command.

    Args:
        args: Parsed command-line arguments with dry_run field

    Returns:
        Exit code (0 for success)
    """
    result = build_engine(args).clean(dry_run=args.dry_run)

    for version in result.missing:
        say(args, f"Forgot {version} (install directory is missing)")
    for version in result.dropped_pins:
        say(args, f"Dropped pin on {version} (not installed)")

    if not result.removed:
        say(args, "Nothing to clean")
        return 0

    prefix = "Would remove" if result.dry_run else "Removed"
    for version in result.removed:
        say(args, f"{prefix} {version}")
    return 0
