"""JSON-file store for synced notifications.

The whole store is read at the start of a command and written back in full at
the end. There is no locking: two commands running at once both load, both
mutate, and whichever flushes last wins.

File format::

    {
      "Notifications": {"<id>": {"id": ..., "repository": {...}, "subject": {...}}},
      "IgnoredRepos": {"owner/repo": true},
      "Details": {"<id>": {"html_url": "..."}}
    }
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..errors import StoreCorrupt
from ..log import get_logger
from .models import Details, Notification

if TYPE_CHECKING:
    from ..github import DetailResolver

_log = get_logger("store")


@dataclass
class Store:
    """Everything gh-notifications knows locally."""

    notifications: dict[str, Notification] = field(default_factory=dict)
    ignored_repos: set[str] = field(default_factory=set)
    details: dict[str, Details] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "Notifications": {nid: n.to_dict() for nid, n in self.notifications.items()},
            "IgnoredRepos": {repo: True for repo in sorted(self.ignored_repos)},
            "Details": {nid: d.to_dict() for nid, d in self.details.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Store:
        """Build a Store from decoded JSON. Missing or null sections are empty.

        Raises ValueError if a notification is filed under a key other than its id.
        """
        notifications = {}
        for nid, raw in (data.get("Notifications") or {}).items():
            n = Notification.from_dict(raw)
            if n.id != str(nid):
                raise ValueError(f"notification {n.id!r} stored under key {nid!r}")
            notifications[n.id] = n
        # IgnoredRepos is a name -> bool map; a false entry means "not ignored"
        ignored_repos = {repo for repo, on in (data.get("IgnoredRepos") or {}).items() if on}
        details = {
            str(nid): Details.from_dict(d)
            for nid, d in (data.get("Details") or {}).items()
            if d is not None
        }
        return cls(notifications=notifications, ignored_repos=ignored_repos, details=details)


def load(path: Path) -> Store:
    """Load the store from disk.

    Returns an empty Store if the file doesn't exist. Raises StoreCorrupt if it
    exists but can't be parsed; other filesystem errors propagate.
    """
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        _log.debug("no store at %s, starting empty", path)
        return Store()

    try:
        data = json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise StoreCorrupt(path, str(e)) from e
    except RecursionError as e:
        raise StoreCorrupt(path, "nested too deeply") from e

    if not isinstance(data, dict):
        raise StoreCorrupt(path, f"expected an object, got {type(data).__name__}")

    try:
        return Store.from_dict(data)
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise StoreCorrupt(path, f"malformed entry: {e!r}") from e


def flush(store: Store, path: Path) -> None:
    """Atomically replace the store file with the full contents of ``store``.

    Creates the parent directory (owner-only) if needed.
    """
    path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(store.to_dict(), f)
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        with suppress(FileNotFoundError):
            os.unlink(tmp_name)
        raise

    _log.debug(
        "flushed %d notifications, %d ignored repos, %d details to %s",
        len(store.notifications),
        len(store.ignored_repos),
        len(store.details),
        path,
    )


def reset(path: Path) -> None:
    """Delete the store file (notifications, ignored repos and cached details)."""
    try:
        path.unlink()
    except FileNotFoundError:
        return
    _log.info("deleted store %s", path)


@contextmanager
def session(path: Path) -> Iterator[Store]:
    """Load the store, yield it, and flush it once if the block succeeds.

    If the block raises, nothing is written: any remote side effects that
    already happened (e.g. dismissals) are not recorded locally.
    """
    store = load(path)
    yield store
    flush(store, path)


def get_or_resolve_detail(
    store: Store,
    notification: Notification,
    resolver: DetailResolver,
) -> Details:
    """Return cached details for a notification, resolving them on first use.

    Cached details are never refreshed. If resolving fails the cache is untouched.
    """
    cached = store.details.get(notification.id)
    if cached is not None:
        return cached

    if not notification.subject.url:
        # Some subject types (e.g. check suites) have no API URL
        details = Details(html_url=notification.repository.html_url)
    else:
        _log.info("loading details for %s", notification.label)
        details = resolver.resolve_detail(notification.subject.url)

    store.details[notification.id] = details
    return details
