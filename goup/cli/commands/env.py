"""
Env command implementation.

Prints or writes the shell setup script.
"""

from goup.bootstrap.generator import EnvScriptGenerator
from goup.cli.utils import get_paths, say


def run(args) -> int:
    """
    Run the env command.

    Args:
        args: Parsed command-line arguments with write field

    Returns:
        Exit code (0 for success)
    """
    generator = EnvScriptGenerator(get_paths(args))

    if not args.write:
        print(generator.render(), end="")
        return 0

    script_path = generator.write()
    say(args, f"Wrote {script_path}")
    say(args, f"Add '. \"{script_path}\"' to your ~/.bashrc")
    return 0
