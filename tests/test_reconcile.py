"""Tests for gh_notifications.inbox.reconcile."""

import pytest

from gh_notifications.errors import RemoteError
from gh_notifications.inbox import reconcile, store
from gh_notifications.inbox.models import Notification, Repository, Subject


def _n(nid: str, repo: str = "a/b", title: str = "") -> Notification:
    return Notification(
        id=nid,
        repository=Repository(full_name=repo, html_url=f"https://github.com/{repo}"),
        subject=Subject(title=title or f"Issue {nid}", url=f"https://api.github.com/x/{nid}"),
    )


# --- sync ---


def test_sync_adds_notifications(source):
    s = store.Store()
    reconcile.sync(s, [_n("1"), _n("2", "x/y")], source)

    assert set(s.notifications) == {"1", "2"}
    assert source.dismissed == []


def test_sync_twice_is_idempotent(source):
    batch = [_n("1"), _n("2", "x/y")]
    once = reconcile.sync(store.Store(), batch, source)
    twice = reconcile.sync(reconcile.sync(store.Store(), batch, source), batch, source)

    assert twice.notifications == once.notifications


def test_sync_overwrites_same_id(source):
    s = store.Store(notifications={"1": _n("1", title="old")})
    reconcile.sync(s, [_n("1", title="new")], source)

    assert s.notifications["1"].subject.title == "new"
    assert len(s.notifications) == 1


def test_sync_keeps_notifications_missing_from_batch(source):
    """The store accumulates; it doesn't mirror what GitHub returned last."""
    s = store.Store(notifications={"A": _n("A")})
    reconcile.sync(s, [_n("B")], source)

    assert set(s.notifications) == {"A", "B"}


def test_sync_empty_batch_changes_nothing(source):
    s = store.Store(notifications={"A": _n("A")})
    reconcile.sync(s, [], source)
    assert set(s.notifications) == {"A"}


def test_sync_dismisses_ignored_repo(source):
    s = store.Store(ignored_repos={"x/y"})
    reconcile.sync(s, [_n("5", "x/y")], source)

    assert source.dismissed == ["5"]
    assert s.notifications == {}


def test_sync_ignored_repo_removes_existing_entry(source):
    s = store.Store(notifications={"5": _n("5", "x/y")}, ignored_repos={"x/y"})
    reconcile.sync(s, [_n("5", "x/y")], source)

    assert source.dismissed == ["5"]
    assert s.notifications == {}


def test_sync_processes_in_order(source):
    s = store.Store(ignored_repos={"x/y"})
    reconcile.sync(s, [_n("3", "x/y"), _n("1"), _n("2", "x/y")], source)

    assert source.dismissed == ["3", "2"]
    assert set(s.notifications) == {"1"}


def test_sync_stops_at_first_failed_dismissal(source):
    source.fail_dismiss.add("2")
    s = store.Store(ignored_repos={"x/y"})

    with pytest.raises(RemoteError):
        reconcile.sync(s, [_n("1", "x/y"), _n("2", "x/y"), _n("3")], source)

    # First dismissal really happened; the rest of the batch was never looked at
    assert source.dismissed == ["1"]
    assert "3" not in s.notifications


def test_sync_failure_leaves_disk_unchanged(source, store_path):
    """Remote dismissals before the failure stick; the local file doesn't change."""
    initial = store.Store(
        notifications={"1": _n("1", "x/y"), "keep": _n("keep")},
    )
    store.flush(initial, store_path)
    before = store_path.read_text()

    source.fail_dismiss.add("2")
    with pytest.raises(RemoteError), store.session(store_path) as s:
        s.ignored_repos.add("x/y")
        reconcile.sync(s, [_n("1", "x/y"), _n("2", "x/y")], source)

    assert source.dismissed == ["1"]
    assert store_path.read_text() == before
    assert "1" in store.load(store_path).notifications


# --- dismiss ---


def test_dismiss_removes_locally(source):
    s = store.Store(notifications={"1": _n("1"), "2": _n("2")})
    reconcile.dismiss(s, s.notifications["1"], source)

    assert source.dismissed == ["1"]
    assert set(s.notifications) == {"2"}


def test_dismiss_bare_id_not_in_store(source):
    s = store.Store(notifications={"2": _n("2")})
    reconcile.dismiss(s, Notification.bare("99"), source)

    assert source.dismissed == ["99"]
    assert set(s.notifications) == {"2"}


def test_dismiss_bare_id_removes_stored_entry(source):
    s = store.Store(notifications={"2": _n("2")})
    reconcile.dismiss(s, Notification.bare("2"), source)
    assert s.notifications == {}


def test_dismiss_failure_keeps_local_entry(source):
    source.fail_dismiss.add("1")
    s = store.Store(notifications={"1": _n("1")})

    with pytest.raises(RemoteError):
        reconcile.dismiss(s, s.notifications["1"], source)

    assert "1" in s.notifications


def test_dismiss_keeps_cached_details(source):
    s = store.Store(notifications={"1": _n("1")})
    store.get_or_resolve_detail(s, s.notifications["1"], source)

    reconcile.dismiss(s, s.notifications["1"], source)

    assert "1" in s.details


# --- suppress / unsuppress ---


def test_suppress_scenario(source):
    s = store.Store(notifications={"1": _n("1", "a/b")})

    reconcile.suppress(s, ["a/b"], source)

    assert source.dismissed == ["1"]
    assert s.notifications == {}
    assert s.ignored_repos == {"a/b"}


def test_suppress_only_touches_named_repo(source):
    s = store.Store(
        notifications={"1": _n("1", "a/b"), "2": _n("2", "c/d"), "3": _n("3", "a/b")},
    )

    reconcile.suppress(s, ["a/b"], source)

    assert source.dismissed == ["1", "3"]
    assert set(s.notifications) == {"2"}


def test_suppress_repo_with_no_notifications(source):
    s = store.Store()
    reconcile.suppress(s, ["quiet/repo"], source)

    assert s.ignored_repos == {"quiet/repo"}
    assert source.dismissed == []


def test_suppress_failure_aborts_remaining_names(source):
    source.fail_dismiss.add("1")
    s = store.Store(notifications={"1": _n("1", "a/b"), "2": _n("2", "c/d")})

    with pytest.raises(RemoteError):
        reconcile.suppress(s, ["a/b", "c/d"], source)

    # The failing repo was already marked, the next one never got processed
    assert s.ignored_repos == {"a/b"}
    assert set(s.notifications) == {"1", "2"}
    assert source.dismissed == []


def test_unsuppress_does_not_restore(source):
    s = store.Store(notifications={"1": _n("1", "a/b")})
    reconcile.suppress(s, ["a/b"], source)

    reconcile.unsuppress(s, ["a/b"])

    assert s.ignored_repos == set()
    assert s.notifications == {}


def test_unsuppress_unknown_name_is_ignored():
    s = store.Store(ignored_repos={"a/b"})
    reconcile.unsuppress(s, ["never/ignored"])
    assert s.ignored_repos == {"a/b"}


def test_unsuppressed_repo_syncs_normally_again(source):
    s = store.Store(ignored_repos={"a/b"})
    reconcile.unsuppress(s, ["a/b"])
    reconcile.sync(s, [_n("7", "a/b")], source)

    assert set(s.notifications) == {"7"}
    assert source.dismissed == []
