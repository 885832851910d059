"""TUI utilities and helpers."""

import sys

from rich.text import Text


def set_terminal_title(title: str) -> None:
    """Set the terminal/pane title via OSC escape sequence."""
    # OSC 0 sets both icon name and window title
    sys.stdout.write(f"\033]0;{title}\007")
    sys.stdout.flush()


def repo_cell(full_name: str, first_in_group: bool) -> Text:
    """Repo name on the first row of a group, a dim ditto mark after that."""
    if first_in_group:
        return Text(full_name, style="bold cyan")

    return Text("〃", style="dim")
