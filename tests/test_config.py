"""Tests for offertory.config."""

import os
import stat
from pathlib import Path

import pytest

from offertory.config import create_default_config, load_config, load_settings, save_config, set_setting


class TestCreateDefaultConfig:
    """Tests for create_default_config."""

    def test_writes_ledger_table(self, tmp_path: Path) -> None:
        """Should write the default ledger settings."""
        path = tmp_path / "offertory" / "config.toml"

        create_default_config(path)

        assert load_config(path) == {"ledger": {"page_size": 20, "snapshot_limit": 50, "export_dir": ""}}

    def test_private_permissions(self, tmp_path: Path) -> None:
        """Should make the file readable by the owner only."""
        path = tmp_path / "config.toml"

        create_default_config(path)

        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600


class TestLoadSettings:
    """Tests for load_settings."""

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        """Should return defaults without a config file."""
        assert load_settings(tmp_path / "absent.toml") == {"page_size": 20, "snapshot_limit": 50, "export_dir": ""}

    def test_overrides(self, tmp_path: Path) -> None:
        """Should merge file values over the defaults."""
        path = tmp_path / "config.toml"
        save_config({"ledger": {"page_size": 10, "export_dir": "~/exports"}}, path)

        settings = load_settings(path)

        assert settings["page_size"] == 10
        assert settings["snapshot_limit"] == 50
        assert settings["export_dir"] == "~/exports"

    def test_ignores_bad_values(self, tmp_path: Path) -> None:
        """Should ignore values of the wrong type or out of range."""
        path = tmp_path / "config.toml"
        save_config({"ledger": {"page_size": "ten", "snapshot_limit": 0, "export_dir": True}}, path)

        assert load_settings(path) == {"page_size": 20, "snapshot_limit": 50, "export_dir": ""}


class TestSetSetting:
    """Tests for set_setting."""

    def test_creates_file(self, tmp_path: Path) -> None:
        """Should create the config file when missing."""
        path = tmp_path / "config.toml"

        set_setting("page_size", 30, path)

        assert load_settings(path)["page_size"] == 30

    def test_keeps_other_tables(self, tmp_path: Path) -> None:
        """Should leave unrelated config untouched."""
        path = tmp_path / "config.toml"
        save_config({"other": {"x": 1}, "ledger": {"page_size": 5}}, path)

        set_setting("snapshot_limit", 10, path)

        config = load_config(path)
        assert config["other"] == {"x": 1}
        assert config["ledger"] == {"page_size": 5, "snapshot_limit": 10}

    def test_unknown_key(self, tmp_path: Path) -> None:
        """Should reject settings that do not exist."""
        with pytest.raises(KeyError):
            set_setting("colour", "blue", tmp_path / "config.toml")
