"""Merging remote notifications into the local store.

Nothing here writes to disk; callers flush once at the end (see
``store.session``). Remote dismissals happen as they go, so a failure part way
through a batch can leave GitHub ahead of the local file. That gap is
accepted: the next sync or `done` brings them back in line.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..log import get_logger
from .models import Notification
from .store import Store
from .views import notifications_for_repo

if TYPE_CHECKING:
    from ..github import NotificationSource

_log = get_logger("reconcile")


def dismiss(store: Store, notification: Notification, source: NotificationSource) -> Store:
    """Mark a notification done on GitHub, then drop it locally.

    The local entry is only removed if the remote call succeeds. Dismissing an
    id that isn't stored is fine.
    """
    _log.info("marking %s done", notification.label)

    source.dismiss(notification.id)
    store.notifications.pop(notification.id, None)
    return store


def sync(store: Store, batch: Iterable[Notification], source: NotificationSource) -> Store:
    """Merge a freshly fetched batch into the store.

    Notifications from ignored repos are dismissed instead of stored. Stored
    notifications missing from the batch are kept: the store accumulates until
    things are explicitly marked done.
    """
    added = dismissed = 0

    for n in batch:
        if n.repository.full_name in store.ignored_repos:
            dismiss(store, n, source)
            dismissed += 1
        else:
            store.notifications[n.id] = n
            added += 1

    _log.info("sync: %d stored, %d dismissed from ignored repos", added, dismissed)
    return store


def suppress(store: Store, repo_names: Iterable[str], source: NotificationSource) -> Store:
    """Ignore repos, dismissing everything already stored for them.

    Stops at the first failed dismissal; later names are not processed.
    """
    for repo in repo_names:
        store.ignored_repos.add(repo)
        _log.info("ignoring %s", repo)

        for n in notifications_for_repo(store, repo):
            dismiss(store, n, source)

    return store


def unsuppress(store: Store, repo_names: Iterable[str]) -> Store:
    """Stop ignoring repos. Already-dismissed notifications don't come back."""
    for repo in repo_names:
        store.ignored_repos.discard(repo)
        _log.info("unignoring %s", repo)

    return store
