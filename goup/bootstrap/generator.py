"""
Shell environment script generator.

Generates the ``<root>/env`` script that a user sources from ~/.bashrc to put
the enabled Go toolchain on PATH:

    . "$GOPATH/goup/env"

GOROOT is the activation symlink, so the script never needs regenerating when
a different version is enabled.
"""

import logging
import os
import shlex
from pathlib import Path
from typing import Mapping, Optional

from jinja2 import Environment, FileSystemLoader, TemplateError

from goup.core.directory import GoupPaths
from goup.core.exceptions import StateIOError
from goup.core.filesystem import atomic_write

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
ENV_TEMPLATE = "env.sh.j2"


def shell_quote(value) -> str:
    """Quote a path for safe use as a single POSIX shell word."""
    return shlex.quote(str(value))


class EnvScriptGenerator:
    """Render and write the POSIX shell setup script."""

    def __init__(self, paths: GoupPaths, environ: Optional[Mapping[str, str]] = None):
        """
        Initialize generator.

        Args:
            paths: Layout of the goup root
            environ: Environment mapping used to find GOPATH (defaults to os.environ)
        """
        self.paths = paths
        self.environ = os.environ if environ is None else environ
        self._jinja_env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._jinja_env.filters["shell_quote"] = shell_quote

    @property
    def gopath(self) -> Path:
        """$GOPATH if set, otherwise the directory containing the goup root."""
        if self.environ.get("GOPATH"):
            return Path(self.environ["GOPATH"])
        return self.paths.root.parent

    def render(self) -> str:
        """
        Render the script.

        Raises:
            StateIOError: If the template cannot be rendered
        """
        try:
            template = self._jinja_env.get_template(ENV_TEMPLATE)
            return template.render(gopath=self.gopath, goroot=self.paths.link_path)
        except TemplateError as e:
            raise StateIOError(f"Failed to render template {ENV_TEMPLATE}: {e}") from e

    def write(self) -> Path:
        """
        Write the script to <root>/env.

        Returns:
            Path to the written script

        Raises:
            StateIOError: If the script cannot be written
        """
        content = self.render()
        script_path = self.paths.env_file

        try:
            atomic_write(script_path, content)
            script_path.chmod(0o755)
        except OSError as e:
            raise StateIOError(f"Failed to write env script: {e}") from e

        logger.debug(f"Generated env script: {script_path}")
        return script_path
