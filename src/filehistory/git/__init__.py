"""Git integration for locating repositories and reading file history."""

from .entry import HistoryEntry
from .history import HistoryOptions, git_history, read_history, resolve_root

__all__ = [
    "HistoryEntry",
    "HistoryOptions",
    "git_history",
    "read_history",
    "resolve_root",
]
