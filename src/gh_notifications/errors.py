"""Exceptions raised by gh-notifications.

Filesystem failures are left as plain OSError.
"""

from __future__ import annotations

from collections.abc import Sequence


class GhNotificationsError(Exception):
    """Base class for errors reported to the user by the CLI."""


class StoreCorrupt(GhNotificationsError):
    """The persisted store exists but cannot be parsed."""

    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"store at {path} is corrupt: {reason}")
        self.path = path
        self.reason = reason


class RemoteError(GhNotificationsError):
    """A call to the GitHub API failed (network, auth, not found, rate limit...)."""

    def __init__(self, message: str, argv: Sequence[str] = (), stderr: str = "") -> None:
        detail = f"{message}: {stderr.strip()}" if stderr.strip() else message
        super().__init__(detail)
        self.argv = list(argv)
        self.stderr = stderr
