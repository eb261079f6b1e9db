"""Exceptions raised while locating a repository or reading file history."""

from __future__ import annotations


class GitHistoryError(Exception):
    """Base class for every failure raised by filehistory."""


class InvalidArgumentError(GitHistoryError, ValueError):
    """A path argument is not absolute, or a traversal bound is invalid."""


class NotFoundError(GitHistoryError, FileNotFoundError):
    """A file, a repository root, or a ``.git`` ancestor does not exist."""


class RepositoryOpenError(GitHistoryError):
    """The repository root cannot be opened as a git repository."""


class HeadResolutionError(GitHistoryError):
    """HEAD does not point at a commit (e.g. a repository with no commits)."""
