"""Unit tests for XDG path management."""

import os
from pathlib import Path
from unittest.mock import patch

from fingerprint.core.paths import APP_NAME, get_config_dir, get_settings_path


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_CONFIG_HOME", None)

            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME

    def test_empty_xdg_config_home_ignored(self) -> None:
        """An empty XDG_CONFIG_HOME falls back to the default."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": ""}):
            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME


class TestGetSettingsPath:
    """Tests for get_settings_path function."""

    def test_settings_in_config_dir(self, tmp_path: Path) -> None:
        """Settings file is config.toml inside the config directory."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_settings_path()

        assert result == tmp_path / "fingerprint" / "config.toml"
