"""CLI commands for the notification inbox."""

from __future__ import annotations

import argparse
import json
import webbrowser
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from ..config import Config
from ..errors import GhNotificationsError
from ..github import GitHubClient, NotificationSource
from . import reconcile, render, store
from .models import Notification
from .views import group_by_repository, list_suppressed


@dataclass
class CommandContext:
    """Everything a command needs, built once per invocation."""

    store_path: Path
    source: NotificationSource
    console: Console
    hyperlinks: bool = True

    @classmethod
    def from_config(cls, config: Config) -> CommandContext:
        return cls(
            store_path=config.store.resolve_path(),
            source=GitHubClient(hostname=config.github.hostname, gh_path=config.github.gh_path),
            console=Console(),
            hyperlinks=config.display.hyperlinks,
        )


def _grouped_to_json(s: store.Store) -> list[dict]:
    """Grouped view as JSON-serializable data (no detail lookups)."""
    return [
        {
            "repository": repo.to_dict(),
            "notifications": [
                {"id": n.id, "title": n.subject.title, "url": n.subject.url}
                for n in notifications
            ],
        }
        for repo, notifications in group_by_repository(s)
    ]


def show_notifications(ctx: CommandContext, as_json: bool = False) -> None:
    """Print the grouped notifications.

    Looking up links may fetch details; whatever was resolved is saved even if
    a later lookup fails.
    """
    if as_json:
        print(json.dumps(_grouped_to_json(store.load(ctx.store_path))))
        return

    s = store.load(ctx.store_path)
    try:
        if not s.notifications:
            ctx.console.print("No notifications.")
            return
        render.render_notifications(ctx.console, s, ctx.source, ctx.hyperlinks)
    finally:
        store.flush(s, ctx.store_path)


def show_ignored(ctx: CommandContext) -> None:
    s = store.load(ctx.store_path)
    if not list_suppressed(s):
        ctx.console.print("No ignored repos.")
        return
    render.render_ignored(ctx.console, s, ctx.hyperlinks)


def cmd_sync(args: argparse.Namespace) -> None:
    """Pull notifications from GitHub, then list them."""
    ctx: CommandContext = args.ctx
    with store.session(ctx.store_path) as s:
        batch = ctx.source.fetch_all()
        reconcile.sync(s, batch, ctx.source)
    show_notifications(ctx)


def cmd_list(args: argparse.Namespace) -> None:
    """List synced notifications."""
    show_notifications(args.ctx, as_json=getattr(args, "json", False))


def cmd_ignore(args: argparse.Namespace) -> None:
    """Ignore repos and dismiss their stored notifications."""
    ctx: CommandContext = args.ctx
    with store.session(ctx.store_path) as s:
        reconcile.suppress(s, args.repos, ctx.source)
    show_ignored(ctx)


def cmd_unignore(args: argparse.Namespace) -> None:
    """Stop ignoring repos."""
    ctx: CommandContext = args.ctx
    with store.session(ctx.store_path) as s:
        reconcile.unsuppress(s, args.repos)
    show_ignored(ctx)


def cmd_ignored(args: argparse.Namespace) -> None:
    """List ignored repos."""
    show_ignored(args.ctx)


def cmd_done(args: argparse.Namespace) -> None:
    """Mark notifications done by id."""
    ctx: CommandContext = args.ctx
    with store.session(ctx.store_path) as s:
        for notification_id in args.ids:
            n = s.notifications.get(notification_id) or Notification.bare(notification_id)
            reconcile.dismiss(s, n, ctx.source)
    show_notifications(ctx)


def cmd_open(args: argparse.Namespace) -> None:
    """Open a notification's issue/PR in the browser."""
    ctx: CommandContext = args.ctx
    notification_id = args.id

    with store.session(ctx.store_path) as s:
        n = s.notifications.get(notification_id)
        if n is None and notification_id not in s.details:
            raise GhNotificationsError(f"notification {notification_id} not found; try `sync`")
        details = store.get_or_resolve_detail(
            s, n or Notification.bare(notification_id), ctx.source
        )

    if not details.html_url:
        raise GhNotificationsError(f"notification {notification_id} has no link")

    ctx.console.print(details.html_url)
    webbrowser.open(details.html_url)


def cmd_reset(args: argparse.Namespace) -> None:
    """Delete the local store."""
    ctx: CommandContext = args.ctx
    store.reset(ctx.store_path)
    ctx.console.print(f"Deleted {ctx.store_path}")


def cmd_path(args: argparse.Namespace) -> None:
    """Print the store path."""
    print(args.ctx.store_path)


def cmd_tui(args: argparse.Namespace) -> None:
    """Launch the inbox TUI."""
    from .tui import InboxApp, set_terminal_title

    set_terminal_title("gh-notifications")
    app = InboxApp(args.ctx, args.config)
    app.run()


def setup_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the inbox commands (top-level subcommands)."""
    # sync
    sync_parser = subparsers.add_parser(
        "sync",
        help="Sync notifications to disk",
        description=(
            "Pull new notifications from GitHub to disk. Any notifications belonging "
            "to repos that are marked ignored are automatically dismissed."
        ),
    )
    sync_parser.set_defaults(func=cmd_sync)

    # list
    list_parser = subparsers.add_parser(
        "list",
        aliases=["ls"],
        help="List synced notifications",
        description="Show all notifications currently on disk.",
    )
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")
    list_parser.set_defaults(func=cmd_list)

    # ignore
    ignore_parser = subparsers.add_parser(
        "ignore",
        help="Ignore notifications from named repos",
        description=(
            "Mark a repo as ignored. All notifications on disk belonging to the repo "
            "are dismissed. Any future notifications synced from GitHub are "
            "automatically dismissed."
        ),
    )
    ignore_parser.add_argument("repos", nargs="+", metavar="OWNER/REPO")
    ignore_parser.set_defaults(func=cmd_ignore)

    # unignore
    unignore_parser = subparsers.add_parser(
        "unignore",
        help="Unignore notifications from named repos",
        description=(
            "Remove a repo from the ignored list. Any future notifications synced "
            "from GitHub will no longer be automatically dismissed."
        ),
    )
    unignore_parser.add_argument("repos", nargs="+", metavar="OWNER/REPO")
    unignore_parser.set_defaults(func=cmd_unignore)

    # ignored
    ignored_parser = subparsers.add_parser(
        "ignored",
        help="Display ignored repos",
        description="Display the list of ignored repos.",
    )
    ignored_parser.set_defaults(func=cmd_ignored)

    # done
    done_parser = subparsers.add_parser(
        "done",
        help="Mark notifications done",
        description="Dismiss notifications by ID.",
    )
    done_parser.add_argument("ids", nargs="+", metavar="ID", help="Notification ID")
    done_parser.set_defaults(func=cmd_done)

    # open
    open_parser = subparsers.add_parser(
        "open",
        help="Open a notification in the browser",
    )
    open_parser.add_argument("id", help="Notification ID")
    open_parser.set_defaults(func=cmd_open)

    # reset
    reset_parser = subparsers.add_parser(
        "reset",
        help="Delete cached notifications",
        description=(
            "Delete the local data file, which includes the list of ignored repos and "
            "any synced notifications. Only do this if you're having problems."
        ),
    )
    reset_parser.set_defaults(func=cmd_reset)

    # path
    path_parser = subparsers.add_parser("path", help="Print the store file path")
    path_parser.set_defaults(func=cmd_path)

    # tui
    tui_parser = subparsers.add_parser("tui", help="Browse notifications interactively")
    tui_parser.set_defaults(func=cmd_tui)
