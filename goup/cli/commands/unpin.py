"""
Unpin command implementation.
"""

from goup.cli.utils import build_engine, say


def run(args) -> int:
    """
    Run the unpin command.

    Args:
        args: Parsed command-line arguments with version field

    Returns:
        Exit code (0 for success)
    """
    build_engine(args).unpin(args.version)
    say(args, f"{args.version} unpinned")
    return 0
