"""
Pin command implementation.

Protects a version from 'goup remove' and 'goup clean'.
"""

from goup.cli.utils import build_engine, say


def run(args) -> int:
    """
    Run the pin command.

    Args:
        args: Parsed command-line arguments with version field

    Returns:
        Exit code (0 for success)
    """
    build_engine(args).pin(args.version)
    say(args, f"{args.version} pinned")
    return 0
