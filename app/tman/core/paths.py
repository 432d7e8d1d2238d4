"""XDG-compliant path management for tman.

This module provides standardized paths following the XDG Base Directory
Specification for trash storage and configuration.

XDG defaults:
- Config: ~/.config/tman/
- Data (trash root): ~/.local/share/tman/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "tman"

DATA_DIRNAME = "data"
LEDGER_FILENAME = "ledger.json"
SETTINGS_FILENAME = "settings.toml"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/tman/ (or XDG_CONFIG_HOME/tman/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_trash_dir() -> Path:
    """Get the trash root directory path.

    The trash root holds the ledger file and the data directory with
    the relocated content.

    Returns:
        Path to ~/.local/share/tman/ (or XDG_DATA_HOME/tman/).
    """
    return _get_xdg_dir("XDG_DATA_HOME", ".local/share")


def get_settings_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/tman/settings.toml.
    """
    return get_config_dir() / SETTINGS_FILENAME


def get_data_dir(trash_dir: Path | None = None) -> Path:
    """Get the directory holding trashed content.

    Args:
        trash_dir: Trash root. Defaults to get_trash_dir().

    Returns:
        Path to <trash_dir>/data.
    """
    return (trash_dir or get_trash_dir()) / DATA_DIRNAME


def get_ledger_path(trash_dir: Path | None = None) -> Path:
    """Get the ledger file path.

    Args:
        trash_dir: Trash root. Defaults to get_trash_dir().

    Returns:
        Path to <trash_dir>/ledger.json.
    """
    return (trash_dir or get_trash_dir()) / LEDGER_FILENAME
