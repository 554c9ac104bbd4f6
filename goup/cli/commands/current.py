"""
Current command implementation.

Prints the enabled Go version.
"""

from goup.cli.utils import build_engine


def run(args) -> int:
    """
    Run the current command.

    Returns:
        Exit code (0 if a version is enabled, 1 otherwise)
    """
    enabled = build_engine(args).current()
    if enabled is None:
        print("No version enabled. Use 'goup enable' to select one.")
        return 1

    print(enabled)
    return 0
