"""GitHub API access via the gh CLI.

Requests go through ``gh api`` so that authentication (tokens, enterprise
hosts, keyring) is whatever ``gh auth login`` already configured. There is no
timeout: a hung ``gh`` process blocks the command.
"""

from __future__ import annotations

import json
import subprocess
from typing import Any, Protocol
from urllib.parse import urlsplit

from .errors import RemoteError
from .inbox.models import Details, Notification
from .log import get_logger

_log = get_logger("github")

_PUBLIC_API_HOST = "api.github.com"


class DetailResolver(Protocol):
    """Anything that can turn a subject URL into Details."""

    def resolve_detail(self, url: str) -> Details: ...


class NotificationSource(DetailResolver, Protocol):
    """The remote side of the inbox."""

    def fetch_all(self) -> list[Notification]: ...

    def dismiss(self, notification_id: str) -> None: ...


def endpoint_for_url(url: str) -> tuple[str, str | None]:
    """Split an API URL into (endpoint, hostname) for ``gh api``.

    ``https://api.github.com/repos/o/r/issues/1`` -> ``("repos/o/r/issues/1", None)``
    ``https://ghe.example.com/api/v3/repos/o/r`` -> ``("repos/o/r", "ghe.example.com")``

    Anything that isn't an absolute URL is treated as an endpoint already.
    """
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        return url.lstrip("/"), None

    path = parts.path
    if path.startswith("/api/v3/"):
        path = path[len("/api/v3") :]
    endpoint = path.lstrip("/")
    if parts.query:
        endpoint = f"{endpoint}?{parts.query}"

    host = parts.hostname
    if host in (None, _PUBLIC_API_HOST):
        return endpoint, None
    return endpoint, host


class GitHubClient:
    """NotificationSource backed by ``gh api``."""

    def __init__(self, hostname: str | None = None, gh_path: str = "gh") -> None:
        self.hostname = hostname
        self.gh_path = gh_path

    def _argv(self, endpoint: str, method: str | None, hostname: str | None) -> list[str]:
        argv = [self.gh_path, "api"]
        host = hostname or self.hostname
        if host:
            argv += ["--hostname", host]
        if method:
            argv += ["--method", method]
        argv.append(endpoint)
        return argv

    def _run(
        self,
        endpoint: str,
        method: str | None = None,
        hostname: str | None = None,
    ) -> Any:
        """Run ``gh api`` and return the decoded JSON body (None if empty)."""
        argv = self._argv(endpoint, method, hostname)
        _log.debug("running: %s", " ".join(argv))

        try:
            result = subprocess.run(argv, capture_output=True, text=True)
        except OSError as e:
            raise RemoteError(f"could not run {self.gh_path}: {e}", argv) from e

        if result.returncode != 0:
            raise RemoteError(
                f"{method or 'GET'} {endpoint} failed (exit {result.returncode})",
                argv,
                result.stderr,
            )

        body = result.stdout.strip()
        if not body:
            return None
        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise RemoteError(f"{method or 'GET'} {endpoint} returned invalid JSON: {e}", argv) from e

    def fetch_all(self) -> list[Notification]:
        """Fetch the current notifications (a single page, as GitHub returns it)."""
        data = self._run("notifications")
        if not isinstance(data, list):
            raise RemoteError(f"unexpected notifications payload: {type(data).__name__}")

        try:
            notifications = [Notification.from_dict(item) for item in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise RemoteError(f"malformed notification in payload: {e!r}") from e

        _log.info("fetched %d notifications", len(notifications))
        return notifications

    def dismiss(self, notification_id: str) -> None:
        """Mark a notification thread as done."""
        self._run(f"notifications/threads/{notification_id}", method="DELETE")

    def resolve_detail(self, url: str) -> Details:
        """Fetch the subject (issue, PR, ...) behind ``url``."""
        endpoint, host = endpoint_for_url(url)
        data = self._run(endpoint, hostname=host)
        if not isinstance(data, dict):
            raise RemoteError(f"unexpected payload for {url}")
        return Details.from_dict(data)
