"""
End-to-end tests for goup subcommands.

Each test runs the CLI against a temporary root whose config.yaml points the
catalog and downloads at mocked URLs.
"""

import shlex
from unittest.mock import patch

import pytest
import responses

from goup.cli.commands.list_versions import format_listing
from goup.cli.parser import CLI
from goup.core.state import StateManager
from goup.core.version import GoVersion
from goup.toolchain.engine import VersionListing
from tests.fixtures.archives import (
    CATALOG_URL,
    DOWNLOAD_URL,
    LINUX_AMD64,
    archive_filename,
    make_go_archive,
    release_group,
)
from tests.fixtures.directories import create_version_dir, write_state

GO_1_20 = GoVersion(1, 20, 11)
GO_1_21 = GoVersion(1, 21, 3)


@pytest.fixture(autouse=True)
def linux_host():
    with patch("goup.toolchain.catalog.detect_platform", return_value=LINUX_AMD64):
        yield


@pytest.fixture
def root(goup_paths):
    goup_paths.config_file.write_text(
        f"catalog_url: {CATALOG_URL}\ndownload_url: {DOWNLOAD_URL}\ntimeout: 5\n"
    )
    return goup_paths


def goup(root, *argv):
    return CLI().run(["--root", str(root.root), *argv])


def serve_catalog(*versions):
    responses.add(responses.GET, CATALOG_URL, json=[release_group(v) for v in versions])


def serve_archive(version):
    responses.add(
        responses.GET, DOWNLOAD_URL + archive_filename(version), body=make_go_archive(version)
    )


def record(root):
    return StateManager(root.state_file).load()


class TestList:
    @responses.activate
    def test_list(self, root, capsys):
        create_version_dir(root, GO_1_20)
        create_version_dir(root, GO_1_21)
        write_state(root, enabled="go1.21.3", installed=["go1.20.11", "go1.21.3"], pinned=["go1.20.11"])
        serve_catalog("go1.21.3", "go1.22.0")

        assert goup(root, "list") == 0

        assert capsys.readouterr().out.splitlines() == [
            "  go1.22.0",
            "* go1.21.3",
            "i go1.20.11 (PINNED)",
        ]

    @responses.activate
    def test_list_offline(self, root, capsys):
        write_state(root, installed=["go1.21.3"])

        assert goup(root, "list") == 0
        assert capsys.readouterr().out.splitlines() == ["i go1.21.3"]


class TestFormatListing:
    """Test list row styling."""

    def _row(self, **flags):
        values = dict(installed=False, available=False, enabled=False, pinned=False)
        values.update(flags)
        return format_listing(VersionListing(version=GO_1_21, **values))

    def test_available_only(self):
        text = self._row(available=True)
        assert text.plain == "  go1.21.3"
        assert not text.style

    def test_installed_and_available(self):
        assert self._row(installed=True, available=True).style == "green"

    def test_installed_unavailable(self):
        text = self._row(installed=True, pinned=True)
        assert text.plain == "i go1.21.3 (PINNED)"
        assert text.style == "yellow"

    def test_enabled_unavailable(self):
        text = self._row(installed=True, enabled=True)
        assert text.plain == "* go1.21.3"
        assert text.style == "red"


class TestInstallAndEnable:
    @responses.activate
    def test_install(self, root, capsys):
        serve_catalog("go1.21.3")
        serve_archive("go1.21.3")

        assert goup(root, "install", "go1.21.3") == 0

        out = capsys.readouterr().out
        assert "go1.21.3 installed successfully" in out
        assert "goup enable go1.21.3" in out
        assert record(root).installed == {GO_1_21}

    @responses.activate
    def test_install_twice(self, root, capsys):
        create_version_dir(root, GO_1_21)
        write_state(root, installed=["go1.21.3"])

        assert goup(root, "install", "go1.21.3") == 0

        assert "go1.21.3 is already installed" in capsys.readouterr().out
        assert len(responses.calls) == 0

    @responses.activate
    def test_install_unavailable(self, root, capsys):
        serve_catalog("go1.21.3")

        assert goup(root, "install", "go1.99.0") == 1
        assert "Error: Version go1.99.0 not available for download" in capsys.readouterr().err

    def test_enable(self, root, capsys):
        create_version_dir(root, GO_1_21)
        write_state(root, installed=["go1.21.3"])

        assert goup(root, "enable", "go1.21.3") == 0

        assert capsys.readouterr().out == "go1.21.3 enabled\n"
        assert root.link_path.is_symlink()
        assert record(root).enabled == GO_1_21

    def test_enable_not_installed(self, root, capsys):
        assert goup(root, "enable", "go1.21.3") == 1
        assert capsys.readouterr().err == "Error: Version go1.21.3 is not installed\n"

    def test_quiet(self, root, capsys):
        create_version_dir(root, GO_1_21)
        write_state(root, installed=["go1.21.3"])

        assert goup(root, "-q", "enable", "go1.21.3") == 0
        assert capsys.readouterr().out == ""


class TestUpdate:
    @responses.activate
    def test_update(self, root, capsys):
        create_version_dir(root, GO_1_20)
        write_state(root, enabled="go1.20.11", installed=["go1.20.11"])
        serve_catalog("go1.20.11", "go1.21.3")
        serve_archive("go1.21.3")

        assert goup(root, "-q", "update") == 0
        assert record(root).enabled == GO_1_21

        assert goup(root, "update") == 0
        out = capsys.readouterr().out
        assert "The latest version is go1.21.3" in out
        assert "Already up to date!" in out

    @responses.activate
    def test_update_rollback_hint(self, root, capsys):
        create_version_dir(root, GO_1_20)
        write_state(root, enabled="go1.20.11", installed=["go1.20.11"])
        serve_catalog("go1.21.3")
        serve_archive("go1.21.3")

        assert goup(root, "update") == 0

        out = capsys.readouterr().out
        assert "Installed and enabled version go1.21.3" in out
        assert "goup enable go1.20.11" in out


class TestRemoveAndPin:
    def test_pin_blocks_remove(self, root, capsys):
        create_version_dir(root, GO_1_21)
        write_state(root, installed=["go1.21.3"])

        assert goup(root, "pin", "go1.21.3") == 0
        assert goup(root, "remove", "go1.21.3") == 1
        assert "Error: Version go1.21.3 is pinned" in capsys.readouterr().err

        assert goup(root, "unpin", "go1.21.3") == 0
        assert goup(root, "remove", "go1.21.3") == 0
        assert "go1.21.3 uninstalled successfully" in capsys.readouterr().out
        assert not root.install_dir(GO_1_21).exists()

    def test_remove_enabled_notice(self, root, capsys):
        create_version_dir(root, GO_1_21)
        write_state(root, installed=["go1.21.3"])
        goup(root, "enable", "go1.21.3")
        capsys.readouterr()

        assert goup(root, "remove", "go1.21.3") == 0

        out = capsys.readouterr().out
        assert "Version go1.21.3 was enabled" in out
        assert record(root).enabled is None

    def test_pin_not_installed(self, root, capsys):
        assert goup(root, "pin", "go1.21.3") == 1
        assert "is not installed" in capsys.readouterr().err


class TestClean:
    @responses.activate
    def test_clean(self, root, capsys):
        create_version_dir(root, GO_1_20)
        create_version_dir(root, GO_1_21)
        write_state(root, installed=["go1.20.11", "go1.21.3"])
        serve_catalog("go1.21.3")

        assert goup(root, "clean", "--dry-run") == 0
        assert "Would remove go1.20.11" in capsys.readouterr().out
        assert root.install_dir(GO_1_20).is_dir()

        assert goup(root, "clean") == 0
        assert "Removed go1.20.11" in capsys.readouterr().out
        assert not root.install_dir(GO_1_20).exists()

        assert goup(root, "clean") == 0
        assert "Nothing to clean" in capsys.readouterr().out

    @responses.activate
    def test_clean_reports_forgotten(self, root, capsys):
        write_state(root, installed=["go1.20.11"], pinned=["go1.20.11"])
        serve_catalog("go1.21.3")

        assert goup(root, "clean") == 0

        out = capsys.readouterr().out
        assert "Forgot go1.20.11" in out
        assert "Dropped pin on go1.20.11" in out

    @responses.activate
    def test_clean_offline_fails(self, root, capsys):
        write_state(root, installed=[])

        assert goup(root, "clean") == 1
        assert capsys.readouterr().err.startswith("Error: Unable to query")


class TestCurrentAndEnv:
    def test_current(self, root, capsys):
        write_state(root, enabled="go1.21.3", installed=["go1.21.3"])

        assert goup(root, "current") == 0
        assert capsys.readouterr().out == "go1.21.3\n"

    def test_current_nothing_enabled(self, root, capsys):
        assert goup(root, "current") == 1
        assert "No version enabled" in capsys.readouterr().out

    def test_env_print(self, root, capsys):
        assert goup(root, "env") == 0

        out = capsys.readouterr().out
        assert f"export GOROOT={shlex.quote(str(root.link_path))} " in out
        assert not root.env_file.exists()

    def test_env_write(self, root, capsys):
        assert goup(root, "env", "--write") == 0

        assert root.env_file.exists()
        assert f'. "{root.env_file}"' in capsys.readouterr().out


class TestConfigHandling:
    def test_explicit_config_missing(self, root, capsys, tmp_path):
        code = CLI().run(
            ["--root", str(root.root), "--config", str(tmp_path / "nope.yaml"), "current"]
        )

        assert code == 1
        assert "Configuration file not found" in capsys.readouterr().err

    def test_invalid_config(self, root, capsys):
        root.config_file.write_text("timeout: -1\n")

        assert goup(root, "current") == 1
        assert "Error: 'timeout' must be positive" in capsys.readouterr().err

    def test_corrupt_state(self, root, capsys):
        root.state_file.write_text("{{{")

        assert goup(root, "current") == 1
        assert "Unable to parse version file" in capsys.readouterr().err

    def test_root_from_environment(self, root, monkeypatch, capsys):
        monkeypatch.setenv("GOUP_DIR", str(root.root))
        write_state(root, enabled="go1.21.3", installed=["go1.21.3"])

        assert CLI().run(["current"]) == 0
        assert capsys.readouterr().out == "go1.21.3\n"
