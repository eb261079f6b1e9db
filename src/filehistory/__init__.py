"""filehistory package.

Resolve the git repository that owns a file and read that file's commit
history through GitPython.
"""

from .errors import (
    GitHistoryError,
    HeadResolutionError,
    InvalidArgumentError,
    NotFoundError,
    RepositoryOpenError,
)
from .git.history import (
    DEFAULT_MAX_DEPTH,
    HistoryOptions,
    git_history,
    read_history,
    resolve_root,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "GitHistoryError",
    "HeadResolutionError",
    "HistoryOptions",
    "InvalidArgumentError",
    "NotFoundError",
    "RepositoryOpenError",
    "git_history",
    "read_history",
    "resolve_root",
]
