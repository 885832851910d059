"""gh-notifications TUI package."""

from .app import InboxApp
from .utils import set_terminal_title

__all__ = ["InboxApp", "set_terminal_title"]
