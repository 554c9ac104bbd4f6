"""
goup CLI argument parser.

This module implements the command-line interface for goup using argparse.
Every subcommand lives in its own module under goup.cli.commands and exposes
a run(args) function returning the exit code.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from goup.cli.utils import print_error, version_argument
from goup.core.exceptions import GoupError

# Get version from package
try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("goup")
except PackageNotFoundError:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

# Command module mapping
COMMAND_MAP = {
    "list": "goup.cli.commands.list_versions",
    "update": "goup.cli.commands.update",
    "install": "goup.cli.commands.install",
    "enable": "goup.cli.commands.enable",
    "remove": "goup.cli.commands.remove",
    "pin": "goup.cli.commands.pin",
    "unpin": "goup.cli.commands.unpin",
    "clean": "goup.cli.commands.clean",
    "current": "goup.cli.commands.current",
    "env": "goup.cli.commands.env",
}


class CLI:
    """goup command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="goup",
            description=(
                "Go version manager and multiplexer\n\n"
                "goup installs versions of Go to your user directory and "
                "switches between installed versions."
            ),
            epilog='Use "goup COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument("--version", action="version", version=f"goup {__version__}")
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--root",
            type=Path,
            metavar="PATH",
            help="goup directory (default: $GOUP_DIR, $GOPATH/goup or ~/.go/goup)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: <root>/config.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        subparsers.add_parser(
            "list",
            help="List available and installed versions",
            description="List the set of available Go versions, as well as those that are installed",
        )
        subparsers.add_parser(
            "update",
            help="Install and enable the latest version",
            description="Automatically install and enable the latest version of Go",
        )

        self._add_version_command(
            subparsers, "install", "Install a new version of Go", "installed"
        )
        self._add_version_command(
            subparsers,
            "enable",
            "Enable the given Go version. This can be used to roll back updates",
            "enabled",
        )
        self._add_version_command(
            subparsers, "remove", "Remove an installed Go version", "removed"
        )
        self._add_version_command(
            subparsers,
            "pin",
            "Pin the given Go version to keep it from being removed",
            "pinned",
        )
        self._add_version_command(
            subparsers,
            "unpin",
            "Unpin the given Go version, allowing it to be removed",
            "unpinned",
        )

        self._add_clean_command(subparsers)

        subparsers.add_parser(
            "current",
            help="Show the enabled version",
            description="Print the currently enabled Go version",
        )
        self._add_env_command(subparsers)

        return parser

    def _add_version_command(self, subparsers, name: str, description: str, verb: str):
        """Add a subcommand taking a single version argument."""
        parser = subparsers.add_parser(
            name, help=description.split(".")[0], description=description
        )
        parser.add_argument(
            "version",
            type=version_argument,
            metavar="VERSION",
            help=f"The version of Go that will be {verb} (e.g. go1.21.3)",
        )

    def _add_clean_command(self, subparsers):
        """Add 'clean' subcommand."""
        parser = subparsers.add_parser(
            "clean",
            help="Remove out of date versions",
            description=(
                "Remove Go versions that are out of date (no longer available "
                "from go.dev), unless they are pinned or enabled"
            ),
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be removed without removing",
        )

    def _add_env_command(self, subparsers):
        """Add 'env' subcommand."""
        parser = subparsers.add_parser(
            "env",
            help="Print shell setup script",
            description=(
                "Print a POSIX shell script that exports GOPATH and GOROOT and "
                "puts the enabled Go version on PATH"
            ),
        )
        parser.add_argument(
            "--write",
            action="store_true",
            help="Write the script to <root>/env instead of printing it",
        )

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            print_error("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except GoupError as e:
            print_error(str(e))
            if parsed_args.verbose:
                logger.debug("Command failed", exc_info=True)
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.WARNING
            format_str = "%(levelname)s: %(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        module_name = COMMAND_MAP.get(args.command)
        if not module_name:
            print_error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
