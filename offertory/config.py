"""Configuration file management for offertory."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from offertory.domain.archive import DEFAULT_SNAPSHOT_LIMIT
from offertory.domain.paging import DEFAULT_PAGE_SIZE

DEFAULT_SETTINGS: dict[str, Any] = {
    "page_size": DEFAULT_PAGE_SIZE,
    "snapshot_limit": DEFAULT_SNAPSHOT_LIMIT,
    "export_dir": "",
}


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "offertory" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    default_config: dict[str, Any] = {
        "ledger": dict(DEFAULT_SETTINGS),
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config, f)

    os.chmod(config_path, 0o600)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def load_settings(config_path: Path | None = None) -> dict[str, Any]:
    """Load ledger settings merged over the defaults.

    A missing config file yields the defaults. Values of the wrong type, and
    integer settings below 1, are ignored.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings dictionary with every key of DEFAULT_SETTINGS.

    Raises:
        tomllib.TOMLDecodeError: If the config file is not valid TOML.
    """
    settings = dict(DEFAULT_SETTINGS)
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return settings

    ledger = config.get("ledger", {})
    if not isinstance(ledger, dict):
        return settings

    for key, default in DEFAULT_SETTINGS.items():
        value = ledger.get(key)
        if not isinstance(value, type(default)) or isinstance(value, bool):
            continue
        if isinstance(value, int) and value < 1:
            continue
        settings[key] = value

    return settings


def set_setting(key: str, value: Any, config_path: Path | None = None) -> None:
    """Update one ledger setting, creating the config file if needed.

    Args:
        key: Setting name; must be one of DEFAULT_SETTINGS.
        value: New value.
        config_path: Path to config file. If None, uses default location.

    Raises:
        KeyError: If the setting name is unknown.
    """
    if key not in DEFAULT_SETTINGS:
        raise KeyError(key)

    if config_path is None:
        config_path = get_config_path()
    if not config_path.exists():
        create_default_config(config_path)

    config = load_config(config_path)
    ledger = config.get("ledger")
    if not isinstance(ledger, dict):
        ledger = {}
    ledger[key] = value
    config["ledger"] = ledger
    save_config(config, config_path)
