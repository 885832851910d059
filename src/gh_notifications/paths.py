"""Path utilities for gh-notifications."""

import os
from pathlib import Path

APP_NAME = "gh-notifications"


def _xdg_dir(env_var: str, fallback: Path) -> Path:
    value = os.environ.get(env_var)
    if value and os.path.isabs(value):
        return Path(value)
    return fallback


def get_data_dir() -> Path:
    """Get the data directory, following XDG conventions.

    Uses $XDG_DATA_HOME/gh-notifications, or ~/.local/share/gh-notifications.
    Not created here; the store creates it on first flush.
    """
    return _xdg_dir("XDG_DATA_HOME", Path.home() / ".local" / "share") / APP_NAME


def get_store_path() -> Path:
    """Get the default path to the notification store."""
    return get_data_dir() / "store.json"


def get_config_dir() -> Path:
    """Get the config directory ($XDG_CONFIG_HOME/gh-notifications)."""
    return _xdg_dir("XDG_CONFIG_HOME", Path.home() / ".config") / APP_NAME
