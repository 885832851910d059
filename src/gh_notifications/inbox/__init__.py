"""Notification inbox - the local store and everything that reads or updates it."""

from .models import Details, Notification, Repository, Subject
from .reconcile import dismiss, suppress, sync, unsuppress
from .store import Store, flush, get_or_resolve_detail, load, reset, session
from .views import group_by_repository, list_suppressed, notifications_for_repo

__all__ = [
    # Types
    "Details",
    "Notification",
    "Repository",
    "Store",
    "Subject",
    # Store
    "load",
    "flush",
    "reset",
    "session",
    "get_or_resolve_detail",
    # Reconciliation
    "sync",
    "dismiss",
    "suppress",
    "unsuppress",
    # Views
    "group_by_repository",
    "list_suppressed",
    "notifications_for_repo",
]
