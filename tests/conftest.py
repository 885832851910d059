"""Shared fixtures: an in-memory stand-in for the GitHub side."""

import pytest

from gh_notifications.errors import RemoteError
from gh_notifications.inbox.models import Details, Notification


class FakeSource:
    """Records remote calls; can be told to fail for particular ids/urls."""

    def __init__(self) -> None:
        self.batch: list[Notification] = []
        self.dismissed: list[str] = []
        self.resolved: list[str] = []
        self.fail_dismiss: set[str] = set()
        self.fail_resolve: set[str] = set()

    def fetch_all(self) -> list[Notification]:
        return list(self.batch)

    def dismiss(self, notification_id: str) -> None:
        if notification_id in self.fail_dismiss:
            raise RemoteError(f"DELETE notifications/threads/{notification_id} failed")
        self.dismissed.append(notification_id)

    def resolve_detail(self, url: str) -> Details:
        if url in self.fail_resolve:
            raise RemoteError(f"GET {url} failed")
        self.resolved.append(url)
        return Details(html_url=url.replace("api.github.com/repos", "github.com"))


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "data" / "gh-notifications" / "store.json"
