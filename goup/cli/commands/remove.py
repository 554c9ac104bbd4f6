"""
Remove command implementation.

Uninstalls a version of Go.
"""

from goup.cli.utils import build_engine, say


def run(args) -> int:
    """
    Run the remove command.

    Args:
        args: Parsed command-line arguments with version field

    Returns:
        Exit code (0 for success)
    """
    was_enabled = build_engine(args).remove(args.version)

    if was_enabled:
        say(
            args,
            f"Version {args.version} was enabled. Use 'goup enable' to select another.",
        )
    say(args, f"{args.version} uninstalled successfully")
    return 0
