"""Read-only projections of the store, in a stable order."""

from __future__ import annotations

from collections import defaultdict

from .models import Notification, Repository
from .store import Store


def id_sort_key(notification_id: str) -> tuple[int, int, str]:
    """Sort numeric ids numerically, then anything else lexicographically."""
    if notification_id.isascii() and notification_id.isdigit():
        return (0, int(notification_id), notification_id)
    return (1, 0, notification_id)


def _by_id(notifications: list[Notification]) -> list[Notification]:
    return sorted(notifications, key=lambda n: id_sort_key(n.id))


def notifications_for_repo(store: Store, repo: str) -> list[Notification]:
    """All stored notifications for a repo, by id."""
    return _by_id([n for n in store.notifications.values() if n.repository.full_name == repo])


def group_by_repository(store: Store) -> list[tuple[Repository, list[Notification]]]:
    """Group notifications by repository.

    Groups are ordered by repo full name; notifications within a group by id.
    """
    groups: dict[Repository, list[Notification]] = defaultdict(list)
    for n in store.notifications.values():
        groups[n.repository].append(n)

    return [
        (repo, _by_id(groups[repo]))
        for repo in sorted(groups, key=lambda r: (r.full_name, r.html_url))
    ]


def list_suppressed(store: Store) -> list[str]:
    """Ignored repo names, sorted."""
    return sorted(store.ignored_repos)
