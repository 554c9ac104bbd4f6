"""Test fixtures for goup tests.

This package provides reusable pytest fixtures for testing goup components.
Fixtures are organized by type:

- archives: In-memory Go release archives and catalog JSON
- directories: goup root directories and installed-version layouts
- progress: Recording progress sink

Import helpers in your tests using:
    from tests.fixtures.archives import make_go_archive, release_group
    from tests.fixtures.directories import create_version_dir, write_state
"""

__all__ = [
    "archives",
    "directories",
    "progress",
]
