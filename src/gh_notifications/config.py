"""Configuration management for gh-notifications."""

import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .paths import get_config_dir, get_store_path


def get_config_path() -> Path:
    """Get the path to the gh-notifications config file."""
    return get_config_dir() / "config.toml"


def get_default_config() -> str:
    """Return the default config file contents."""
    return """\
# gh-notifications configuration

[store]
# Where synced notifications, ignored repos and cached links are kept.
# Defaults to $XDG_DATA_HOME/gh-notifications/store.json
# path = "~/.local/share/gh-notifications/store.json"

[github]
# API requests go through `gh api`, so authentication is whatever `gh auth login` set up.
# hostname = "github.example.com"   # for GitHub Enterprise
# gh_path = "gh"

[display]
# Render repo names and notification IDs as terminal hyperlinks
hyperlinks = true
"""


@dataclass
class StoreConfig:
    """Where the notification store lives."""

    path: str | None = None

    def resolve_path(self) -> Path:
        if self.path:
            return Path(self.path).expanduser()
        return get_store_path()


@dataclass
class GitHubConfig:
    """How to reach the GitHub API."""

    hostname: str | None = None  # passed to `gh api --hostname`
    gh_path: str = "gh"


@dataclass
class DisplayConfig:
    """Configuration for table output."""

    hyperlinks: bool = True


@dataclass
class KeybindingsConfig:
    """Configuration for TUI keybindings.

    Each command field is a string where each character is a valid key binding.
    For example, quit="qQ" means both 'q' and 'Q' will quit.

    The up_down field is a 2-character string: up, down.
    For vim: "kj". Empty string means use default arrow keys only.
    """

    quit: str = "q"
    sync: str = "s"
    done: str = "d"
    open: str = "o"
    ignore: str = "i"
    refresh: str = "g"
    up_down: str = ""  # 2-char string: up, down (e.g., "kj" for vim)


@dataclass
class TuiConfig:
    """Configuration for the TUI."""

    keybindings: KeybindingsConfig = field(default_factory=KeybindingsConfig)


@dataclass
class Config:
    """gh-notifications configuration."""

    store: StoreConfig = field(default_factory=StoreConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    tui: TuiConfig = field(default_factory=TuiConfig)


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from file, or return defaults."""
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return Config()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        # Warn but return defaults
        print(f"Warning: Could not load config from {config_path}: {e}", file=sys.stderr)
        return Config()

    return _parse_config(data)


def _parse_config(data: dict[str, Any]) -> Config:
    """Parse config dict into Config object."""
    store_data = data.get("store", {})
    store = StoreConfig(path=store_data.get("path"))

    github_data = data.get("github", {})
    github = GitHubConfig(
        hostname=github_data.get("hostname"),
        gh_path=github_data.get("gh_path", "gh"),
    )

    display_data = data.get("display", {})
    display = DisplayConfig(hyperlinks=display_data.get("hyperlinks", True))

    tui_data = data.get("tui", {})
    keybindings_data = tui_data.get("keybindings", {})
    # Use dataclass defaults for any unspecified keybindings
    defaults = KeybindingsConfig()
    keybindings = KeybindingsConfig(
        **{
            field: keybindings_data.get(field, getattr(defaults, field))
            for field in defaults.__dataclass_fields__
        }
    )
    tui = TuiConfig(keybindings=keybindings)

    return Config(store=store, github=github, display=display, tui=tui)


def ensure_config_exists() -> Path:
    """Ensure the config file exists, creating with defaults if needed."""
    config_path = get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(get_default_config())

    return config_path
