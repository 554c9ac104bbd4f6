"""
Unit tests for YAML configuration loading.
"""

import pytest

from goup.core.config import (
    DEFAULT_CATALOG_URL,
    DEFAULT_DOWNLOAD_URL,
    GoupConfig,
    load_config,
    resolve_config_path,
)
from goup.core.exceptions import ConfigError


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "config.yaml"


class TestLoadConfig:
    """Test load_config function."""

    def test_missing_optional_file(self, config_file):
        config = load_config(config_file)
        assert config == GoupConfig()
        assert config.catalog_url == DEFAULT_CATALOG_URL
        assert config.download_url == DEFAULT_DOWNLOAD_URL
        assert config.timeout == 30

    def test_missing_required_file(self, config_file):
        with pytest.raises(ConfigError, match="not found"):
            load_config(config_file, required=True)

    def test_empty_file(self, config_file):
        config_file.write_text("")
        assert load_config(config_file) == GoupConfig()

    def test_full_config(self, config_file):
        config_file.write_text(
            "catalog_url: https://mirror.example/dl/?mode=json\n"
            "download_url: https://mirror.example/dl/\n"
            "timeout: 5.5\n"
        )

        config = load_config(config_file)

        assert config.catalog_url == "https://mirror.example/dl/?mode=json"
        assert config.download_url == "https://mirror.example/dl/"
        assert config.timeout == 5.5

    def test_partial_config_keeps_defaults(self, config_file):
        config_file.write_text("timeout: 10\n")

        config = load_config(config_file)

        assert config.timeout == 10
        assert config.catalog_url == DEFAULT_CATALOG_URL

    def test_unknown_keys_ignored(self, config_file):
        config_file.write_text("mirror_name: internal\ntimeout: 10\n")
        assert load_config(config_file).timeout == 10

    def test_invalid_yaml(self, config_file):
        config_file.write_text("catalog_url: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(config_file)

    def test_not_a_mapping(self, config_file):
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="must be a mapping"):
            load_config(config_file)

    @pytest.mark.parametrize(
        "content,message",
        [
            ("catalog_url: ''\n", "catalog_url"),
            ("download_url: 42\n", "download_url"),
            ("timeout: soon\n", "number"),
            ("timeout: true\n", "number"),
            ("timeout: 0\n", "positive"),
            ("timeout: -3\n", "positive"),
        ],
    )
    def test_invalid_values(self, config_file, content, message):
        config_file.write_text(content)

        with pytest.raises(ConfigError, match=message):
            load_config(config_file)


class TestResolveConfigPath:
    """Test config file location."""

    def test_default_under_root(self, tmp_path):
        assert resolve_config_path(tmp_path) == tmp_path / "config.yaml"

    def test_explicit(self, tmp_path):
        explicit = tmp_path / "other.yaml"
        assert resolve_config_path(tmp_path / "root", explicit) == explicit
