"""Notification types, shaped like the GitHub notifications API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Repository:
    """The repository a notification belongs to."""

    full_name: str = ""
    html_url: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Repository:
        data = data or {}
        return cls(
            full_name=data.get("full_name") or "",
            html_url=data.get("html_url") or "",
        )

    def to_dict(self) -> dict[str, str]:
        return {"full_name": self.full_name, "html_url": self.html_url}


@dataclass(frozen=True)
class Subject:
    """What the notification is about.

    ``url`` is the API URL of the issue/PR/etc; resolving it yields Details.
    """

    title: str = ""
    url: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Subject:
        data = data or {}
        return cls(title=data.get("title") or "", url=data.get("url") or "")

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "url": self.url}


@dataclass(frozen=True)
class Details:
    """Resolved subject details. Cached forever once fetched."""

    html_url: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Details:
        data = data or {}
        return cls(html_url=data.get("html_url") or "")

    def to_dict(self) -> dict[str, str]:
        return {"html_url": self.html_url}


@dataclass(frozen=True)
class Notification:
    """A single inbox event. Identity is ``id``."""

    id: str
    repository: Repository = field(default_factory=Repository)
    subject: Subject = field(default_factory=Subject)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Notification:
        """Build a Notification from an API (or store) object.

        Raises KeyError if there is no id. GitHub sends ids as strings, but
        accept ints as well.
        """
        return cls(
            id=str(data["id"]),
            repository=Repository.from_dict(data.get("repository")),
            subject=Subject.from_dict(data.get("subject")),
        )

    @classmethod
    def bare(cls, notification_id: str) -> Notification:
        """A notification known only by id (e.g. `done 1234`)."""
        return cls(id=notification_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "repository": self.repository.to_dict(),
            "subject": self.subject.to_dict(),
        }

    @property
    def label(self) -> str:
        """Human-readable reference for log messages."""
        return f"'{self.subject.title}'" if self.subject.title else f"notification {self.id}"
