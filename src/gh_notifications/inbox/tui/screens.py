"""Modal screens for the TUI."""

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Label


class ConfirmIgnoreScreen(ModalScreen[bool]):
    """Ask before ignoring a repo, since it dismisses everything stored for it.

    Returns True on confirm, False on cancel.
    """

    CSS = """
    ConfirmIgnoreScreen {
        align: center middle;
    }

    ConfirmIgnoreScreen > Vertical {
        width: 60;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $warning;
    }

    ConfirmIgnoreScreen Label {
        width: 100%;
        text-align: center;
    }

    ConfirmIgnoreScreen .hint {
        color: $text-muted;
        text-style: italic;
        padding-top: 1;
    }
    """

    BINDINGS = [
        ("y", "confirm", "Yes"),
        ("enter", "confirm", "Yes"),
        ("n", "cancel", "No"),
        ("escape", "cancel", "Cancel"),
    ]

    def __init__(self, repo: str, count: int) -> None:
        super().__init__()
        self.repo = repo
        self.count = count

    def compose(self) -> ComposeResult:
        plural = "" if self.count == 1 else "s"
        with Vertical():
            yield Label(f"Ignore {self.repo}?")
            yield Label(f"{self.count} notification{plural} will be marked done on GitHub.")
            yield Label("y / Enter to ignore, n / Escape to cancel", classes="hint")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
