"""
Enable command implementation.

Switches the active Go version.
"""

from goup.cli.utils import build_engine, say


def run(args) -> int:
    """
    Run the enable command.

    Args:
        args: Parsed command-line arguments with version field

    Returns:
        Exit code (0 for success)
    """
    build_engine(args).enable(args.version)
    say(args, f"{args.version} enabled")
    return 0
