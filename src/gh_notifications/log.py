"""Shared logging for gh-notifications.

All components log to $TMPDIR/gh-notifications.log via Python's logging module.
Filter with grep: grep 'gh_notifications.reconcile' /tmp/gh-notifications.log
"""

import logging
import sys
import tempfile
from pathlib import Path

_LOG_PATH = Path(tempfile.gettempdir()) / "gh-notifications.log"

_handler = logging.FileHandler(_LOG_PATH, delay=True)
_handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(message)s", datefmt="%H:%M:%S"))

_root = logging.getLogger("gh_notifications")
_root.addHandler(_handler)
_root.setLevel(logging.DEBUG)
# don't propagate to root logger (avoids duplicate output if someone
# configures the root logger elsewhere)
_root.propagate = False

_stderr_handler: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    return _root.getChild(name)


def enable_stderr(level: int = logging.INFO) -> None:
    """Mirror log output to stderr (used by --verbose)."""
    global _stderr_handler

    if _stderr_handler is not None:
        _stderr_handler.setLevel(level)
        return

    _stderr_handler = logging.StreamHandler(sys.stderr)
    _stderr_handler.setFormatter(logging.Formatter("%(message)s"))
    _stderr_handler.setLevel(level)
    _root.addHandler(_stderr_handler)
