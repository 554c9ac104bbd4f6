"""
Tests for the shell setup script generator.
"""

import os
import shlex
import stat

import pytest

from goup.bootstrap.generator import EnvScriptGenerator
from goup.core.directory import GoupPaths
from goup.core.exceptions import StateIOError


class TestRender:
    """Test EnvScriptGenerator.render."""

    def test_exports_gopath_and_goroot(self, goup_paths):
        script = EnvScriptGenerator(goup_paths, environ={"GOPATH": "/home/user/go"}).render()

        assert script.startswith("#!/bin/sh\n")
        assert "export GOPATH=/home/user/go " in script
        assert f"export GOROOT={shlex.quote(str(goup_paths.link_path))} " in script
        assert script.endswith("\n")

    def test_gopath_defaults_to_root_parent(self, goup_paths):
        generator = EnvScriptGenerator(goup_paths, environ={})

        assert generator.gopath == goup_paths.root.parent
        assert f"export GOPATH={shlex.quote(str(goup_paths.root.parent))} " in generator.render()

    def test_path_entries_guarded(self, goup_paths):
        script = EnvScriptGenerator(goup_paths, environ={}).render()

        assert 'export PATH="$GOPATH/bin:$PATH"' in script
        assert 'export PATH="$GOROOT/bin:$PATH"' in script
        assert script.count('case ":${PATH}:" in') == 2

    @pytest.mark.parametrize(
        "gopath",
        [
            "/home/user/my go",
            "/tmp/a\"b",
            "/tmp/$(touch pwned)",
            "/tmp/`id`/go",
            "/tmp/it's",
        ],
    )
    def test_paths_are_shell_quoted(self, goup_paths, gopath):
        """Test special characters in paths stay one literal shell word."""
        script = EnvScriptGenerator(goup_paths, environ={"GOPATH": gopath}).render()

        line = next(text for text in script.splitlines() if text.startswith("export GOPATH="))
        assignment = shlex.split(line, comments=True)[1]
        assert assignment == f"GOPATH={gopath}"

    def test_goroot_is_link_not_version(self, goup_paths):
        """Test the script does not name any specific version."""
        script = EnvScriptGenerator(goup_paths, environ={}).render()
        assert "go1." not in script

    def test_template_error(self, goup_paths, monkeypatch):
        monkeypatch.setattr("goup.bootstrap.generator.ENV_TEMPLATE", "missing.sh.j2")

        with pytest.raises(StateIOError, match="Failed to render template"):
            EnvScriptGenerator(goup_paths, environ={}).render()


class TestWrite:
    """Test EnvScriptGenerator.write."""

    def test_write(self, goup_paths):
        generator = EnvScriptGenerator(goup_paths, environ={})

        script_path = generator.write()

        assert script_path == goup_paths.env_file
        assert script_path.read_text() == generator.render()

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_write_executable(self, goup_paths):
        script_path = EnvScriptGenerator(goup_paths, environ={}).write()
        assert script_path.stat().st_mode & stat.S_IXUSR

    def test_write_creates_root(self, tmp_path):
        paths = GoupPaths(tmp_path / "fresh" / "goup")
        EnvScriptGenerator(paths, environ={}).write()
        assert paths.env_file.exists()
