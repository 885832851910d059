"""Interactive inbox for synced GitHub notifications."""

import contextlib
import webbrowser
from collections.abc import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import DataTable, Footer, Header, Static

from ...config import Config, load_config
from ...errors import GhNotificationsError
from ...log import get_logger
from .. import reconcile, store
from ..cli import CommandContext
from ..views import group_by_repository, list_suppressed
from .screens import ConfirmIgnoreScreen
from .utils import repo_cell

_log = get_logger("tui")


def _build_bindings(keys: str, action: str, label: str, show: bool = True) -> list[Binding]:
    """Build Binding objects for all keys mapped to an action.

    Args:
        keys: String of characters, each is a key binding
        action: The action name (without 'action_' prefix)
        label: Human-readable label for the action
        show: Whether to show in footer (only first key will be shown)

    Returns:
        List of Binding objects
    """
    if not keys:
        return []

    bindings = []
    # First key gets the visible binding
    bindings.append(Binding(keys[0], action, label, show=show))

    # Additional keys get hidden bindings
    for key in keys[1:]:
        bindings.append(Binding(key, action, label, show=False))

    return bindings


class InboxApp(App):
    """Browse, open and dismiss synced notifications.

    Every action is its own load -> mutate -> flush, same as the CLI.
    """

    CSS = """
    #notifications {
        height: 1fr;
    }

    #status {
        height: 1;
        background: $surface;
        color: $text-muted;
        padding: 0 1;
    }
    """

    def __init__(self, ctx: CommandContext, config: Config | None = None) -> None:
        super().__init__()
        self.ctx = ctx
        self.config = config or load_config()
        self._setup_keybindings()

    def _setup_keybindings(self) -> None:
        """Build keybindings from config."""
        kb = self.config.tui.keybindings

        for b in _build_bindings(kb.quit, "quit", "Quit"):
            self.bind(b.key, b.action, description=b.description, show=b.show)
        self.bind("escape", "quit", description="Quit", show=False)

        for b in _build_bindings(kb.sync, "sync", "Sync"):
            self.bind(b.key, b.action, description=b.description, show=b.show)

        for b in _build_bindings(kb.done, "done", "Done"):
            self.bind(b.key, b.action, description=b.description, show=b.show)

        for b in _build_bindings(kb.open, "open", "Open"):
            self.bind(b.key, b.action, description=b.description, show=b.show)

        for b in _build_bindings(kb.ignore, "ignore", "Ignore Repo"):
            self.bind(b.key, b.action, description=b.description, show=b.show)

        for b in _build_bindings(kb.refresh, "refresh", "Refresh", show=False):
            self.bind(b.key, b.action, description=b.description, show=b.show)

        # Arrow key alternatives (if configured)
        if len(kb.up_down) == 2:
            up, down = kb.up_down
            self.bind(up, "cursor_up", description="Up", show=False)
            self.bind(down, "cursor_down", description="Down", show=False)

    def compose(self) -> ComposeResult:
        yield Header()
        yield DataTable(id="notifications")
        yield Static("", id="status")
        yield Footer()

    def on_mount(self) -> None:
        self.title = "gh-notifications"
        self.sub_title = "inbox"

        table = self.query_one("#notifications", DataTable)
        table.cursor_type = "row"
        table.add_column("Repo", width=30)
        table.add_column("ID", width=12)
        table.add_column("Title")

        self._refresh_notifications()
        self.refresh_bindings()

    def _run(self, what: str, fn: Callable[[], None]) -> bool:
        """Run an action, reporting failures in the UI instead of crashing."""
        try:
            fn()
        except (GhNotificationsError, OSError) as e:
            _log.error("%s failed: %s", what, e)
            self.notify(f"{what} failed: {e}", severity="error")
            return False
        return True

    def _selected_id(self) -> str | None:
        table = self.query_one("#notifications", DataTable)
        if table.row_count == 0:
            return None
        try:
            row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        except Exception:
            return None
        return row_key.value if row_key else None

    def _refresh_notifications(self) -> None:
        table = self.query_one("#notifications", DataTable)
        current_key = self._selected_id()
        current_index = table.cursor_coordinate.row

        try:
            s = store.load(self.ctx.store_path)
        except (GhNotificationsError, OSError) as e:
            self.notify(f"Could not load store: {e}", severity="error")
            return

        table.clear()
        groups = group_by_repository(s)
        for repo, notifications in groups:
            for i, n in enumerate(notifications):
                table.add_row(
                    repo_cell(repo.full_name, i == 0),
                    Text(n.id, style="dim"),
                    Text(n.subject.title),
                    key=n.id,
                )

        # Restore cursor position
        if table.row_count > 0:
            target_index = None
            if current_key:
                with contextlib.suppress(Exception):
                    target_index = table.get_row_index(current_key)
            if target_index is None:
                target_index = min(current_index, table.row_count - 1)
            table.move_cursor(row=target_index)

        ignored = len(list_suppressed(s))
        status = self.query_one("#status", Static)
        status.update(
            f"{len(s.notifications)} notifications in {len(groups)} repos, {ignored} ignored"
        )

    def action_refresh(self) -> None:
        self._refresh_notifications()

    def action_sync(self) -> None:
        def do_sync() -> None:
            with store.session(self.ctx.store_path) as s:
                batch = self.ctx.source.fetch_all()
                reconcile.sync(s, batch, self.ctx.source)

        if self._run("Sync", do_sync):
            self.notify("Synced")
        self._refresh_notifications()

    def action_done(self) -> None:
        notification_id = self._selected_id()
        if notification_id is None:
            return

        def do_done() -> None:
            with store.session(self.ctx.store_path) as s:
                n = s.notifications.get(notification_id)
                if n is not None:
                    reconcile.dismiss(s, n, self.ctx.source)

        self._run("Done", do_done)
        self._refresh_notifications()

    def action_open(self) -> None:
        notification_id = self._selected_id()
        if notification_id is None:
            return

        urls: list[str] = []

        def do_open() -> None:
            with store.session(self.ctx.store_path) as s:
                n = s.notifications.get(notification_id)
                if n is not None:
                    urls.append(store.get_or_resolve_detail(s, n, self.ctx.source).html_url)

        if self._run("Open", do_open) and urls and urls[0]:
            webbrowser.open(urls[0])

    def action_ignore(self) -> None:
        notification_id = self._selected_id()
        if notification_id is None:
            return

        try:
            s = store.load(self.ctx.store_path)
        except (GhNotificationsError, OSError) as e:
            self.notify(f"Could not load store: {e}", severity="error")
            return

        n = s.notifications.get(notification_id)
        if n is None:
            return
        repo = n.repository.full_name
        count = sum(1 for other in s.notifications.values() if other.repository.full_name == repo)

        def handle_confirm(confirmed: bool | None) -> None:
            if not confirmed:
                return

            def do_ignore() -> None:
                with store.session(self.ctx.store_path) as s:
                    reconcile.suppress(s, [repo], self.ctx.source)

            if self._run("Ignore", do_ignore):
                self.notify(f"Ignoring {repo}")
            self._refresh_notifications()

        self.push_screen(ConfirmIgnoreScreen(repo, count), handle_confirm)

    def action_cursor_up(self) -> None:
        self.query_one("#notifications", DataTable).action_cursor_up()

    def action_cursor_down(self) -> None:
        self.query_one("#notifications", DataTable).action_cursor_down()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Enter opens the notification."""
        self.action_open()