"""Tests for configuration parsing."""

import tempfile
from pathlib import Path

from gh_notifications.config import KeybindingsConfig, _parse_config, load_config
from gh_notifications.inbox.tui.app import _build_bindings
from gh_notifications.paths import get_store_path


def test_defaults():
    config = _parse_config({})
    assert config.store.path is None
    assert config.store.resolve_path() == get_store_path()
    assert config.github.hostname is None
    assert config.github.gh_path == "gh"
    assert config.display.hyperlinks is True


def test_store_path_override_expands_user():
    config = _parse_config({"store": {"path": "~/notes/gh.json"}})
    assert config.store.resolve_path() == Path.home() / "notes" / "gh.json"


def test_github_section():
    config = _parse_config({"github": {"hostname": "ghe.example.com", "gh_path": "/opt/gh"}})
    assert config.github.hostname == "ghe.example.com"
    assert config.github.gh_path == "/opt/gh"


def test_store_path_follows_xdg_data_home(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    assert get_store_path() == tmp_path / "gh-notifications" / "store.json"


def test_relative_xdg_data_home_is_ignored(monkeypatch):
    monkeypatch.setenv("XDG_DATA_HOME", "relative/dir")
    assert get_store_path() == Path.home() / ".local" / "share" / "gh-notifications" / "store.json"


def test_load_config_missing_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = load_config(Path(tmpdir) / "nope.toml")
        assert config.display.hyperlinks is True


def test_load_config_invalid_toml_uses_defaults(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.toml"
        path.write_text("this is [not toml")
        config = load_config(path)

    assert config.github.gh_path == "gh"
    assert "Warning" in capsys.readouterr().err


def test_load_config_from_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.toml"
        path.write_text('[display]\nhyperlinks = false\n\n[tui.keybindings]\ndone = "dx"\n')
        config = load_config(path)

    assert config.display.hyperlinks is False
    assert config.tui.keybindings.done == "dx"


def test_keybindings_defaults():
    """KeybindingsConfig has expected defaults."""
    kb = KeybindingsConfig()
    assert kb.quit == "q"
    assert kb.sync == "s"
    assert kb.done == "d"
    assert kb.open == "o"
    assert kb.ignore == "i"
    assert kb.refresh == "g"
    assert kb.up_down == ""


def test_parse_keybindings_partial_override():
    """Parsing config with partial keybindings uses defaults for unspecified."""
    data = {
        "tui": {
            "keybindings": {
                "quit": "qQ",
                "up_down": "kj",
            }
        }
    }
    config = _parse_config(data)
    kb = config.tui.keybindings

    # Overridden
    assert kb.quit == "qQ"
    assert kb.up_down == "kj"

    # Defaults preserved
    assert kb.sync == "s"
    assert kb.done == "d"
    assert kb.ignore == "i"


def test_parse_keybindings_missing_section():
    """Parsing config without keybindings section uses all defaults."""
    config = _parse_config({"tui": {}})
    kb = config.tui.keybindings

    assert kb.quit == "q"
    assert kb.up_down == ""


def test_build_bindings_single_key():
    """Single key creates one visible binding."""
    bindings = _build_bindings("d", "done", "Done")
    assert len(bindings) == 1
    assert bindings[0].key == "d"
    assert bindings[0].action == "done"
    assert bindings[0].description == "Done"
    assert bindings[0].show is True


def test_build_bindings_multiple_keys():
    """Multiple keys create one visible + hidden bindings."""
    bindings = _build_bindings("qQe", "quit", "Quit")
    assert len(bindings) == 3

    # First is visible
    assert bindings[0].key == "q"
    assert bindings[0].show is True

    # Rest are hidden
    assert bindings[1].key == "Q"
    assert bindings[1].show is False
    assert bindings[2].key == "e"
    assert bindings[2].show is False


def test_build_bindings_empty():
    """Empty keys string returns no bindings."""
    assert _build_bindings("", "quit", "Quit") == []


def test_build_bindings_hidden():
    """show=False makes all bindings hidden."""
    bindings = _build_bindings("gG", "refresh", "Refresh", show=False)
    assert len(bindings) == 2
    assert bindings[0].show is False
    assert bindings[1].show is False
