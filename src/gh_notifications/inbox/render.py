"""Rich tables for the CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from .store import Store, get_or_resolve_detail
from .views import group_by_repository, list_suppressed

if TYPE_CHECKING:
    from ..github import DetailResolver

_GITHUB_WEB = "https://github.com"


def link(label: str, url: str, enabled: bool = True) -> Text:
    """A cell that is a terminal hyperlink when supported and enabled."""
    if enabled and url:
        return Text(label, style=Style(link=url))
    return Text(label)


def build_notifications_table(
    store: Store,
    resolver: DetailResolver,
    hyperlinks: bool = True,
) -> Table:
    """Build the grouped notifications table.

    Resolves (and caches in ``store``) details for every row. Any failure
    propagates before a table exists, so nothing partial is ever drawn.
    """
    table = Table(box=box.ROUNDED)
    table.add_column("Repo", justify="right")
    table.add_column("ID")
    table.add_column("Title")

    for repo, notifications in group_by_repository(store):
        for i, n in enumerate(notifications):
            details = get_or_resolve_detail(store, n, resolver)
            table.add_row(
                link(repo.full_name, repo.html_url, hyperlinks) if i == 0 else Text(""),
                link(n.id, details.html_url, hyperlinks),
                Text(n.subject.title),
                end_section=i == len(notifications) - 1,
            )

    return table


def build_ignored_table(store: Store, hyperlinks: bool = True) -> Table:
    table = Table(box=box.ROUNDED)
    table.add_column("Ignored Repo")

    for repo in list_suppressed(store):
        table.add_row(link(repo, f"{_GITHUB_WEB}/{repo}", hyperlinks))

    return table


def render_notifications(
    console: Console,
    store: Store,
    resolver: DetailResolver,
    hyperlinks: bool = True,
) -> None:
    console.print(build_notifications_table(store, resolver, hyperlinks))


def render_ignored(console: Console, store: Store, hyperlinks: bool = True) -> None:
    console.print(build_ignored_table(store, hyperlinks))
