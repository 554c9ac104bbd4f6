"""
Pytest configuration and shared fixtures for goup tests.
"""

import pytest

from goup.core.platform import clear_platform_cache

# Import test fixtures to make them available to all tests
# These imports register the fixtures with pytest's fixture discovery system
# ruff: noqa: F401
from tests.fixtures.archives import linux_amd64
from tests.fixtures.directories import goup_root, goup_paths, state_manager


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests away from the real GOPATH and home directory."""
    monkeypatch.delenv("GOUP_DIR", raising=False)
    monkeypatch.delenv("GOPATH", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    clear_platform_cache()
    yield
    clear_platform_cache()
