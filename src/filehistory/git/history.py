"""Repository discovery and per-file commit history."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from git import Commit, Repo
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from ..errors import (
    HeadResolutionError,
    InvalidArgumentError,
    NotFoundError,
    RepositoryOpenError,
)

logger = logging.getLogger(__name__)

StrPath = Union[str, "os.PathLike[str]"]

METADATA_DIR = ".git"
DEFAULT_MAX_DEPTH = 100_000


@dataclass(slots=True)
class HistoryOptions:
    """Optional settings for :func:`git_history`.

    Attributes
    ----------
    repo_root:
        Predetermined repository root. When set, repository discovery is
        skipped entirely and this directory is read as-is.
    max_depth:
        Maximum number of commits inspected while walking from HEAD. Longer
        histories are truncated to the commits found within this bound.
    """

    repo_root: Optional[StrPath] = None
    max_depth: int = DEFAULT_MAX_DEPTH


def _absolute(path: StrPath, label: str) -> Path:
    candidate = Path(path)
    if not candidate.is_absolute():
        raise InvalidArgumentError(f"{label} must be absolute: {path}")
    return Path(os.path.normpath(candidate))


def _exists(path: Path) -> bool:
    return os.access(path, os.F_OK)


def _check_depth(max_depth: int) -> None:
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        raise InvalidArgumentError(f"max_depth must be a positive integer: {max_depth!r}")


def resolve_root(path: StrPath) -> Path:
    """Return the closest directory at or above ``path`` that contains ``.git``.

    Parameters
    ----------
    path:
        Absolute path to a file or directory

    Returns
    -------
    The repository root directory

    Raises
    ------
    InvalidArgumentError
        If ``path`` is not absolute
    NotFoundError
        If the file-system root is reached without finding ``.git``
    """
    current = _absolute(path, "path")

    while True:
        if _exists(current / METADATA_DIR):
            logger.debug("Resolved repository root %s for %s", current, path)
            return current

        parent = current.parent
        if parent == current:
            raise NotFoundError(f"No {METADATA_DIR} directory found above {path}")
        current = parent


def _relative_path(target: Path, root: Path) -> Optional[str]:
    """Return ``target`` relative to ``root`` in git's ``/``-separated form.

    ``None`` means the target lies outside the repository. The empty string
    stands for the root itself.
    """
    try:
        relative = os.path.relpath(target, root)
    except ValueError:
        # different drives on Windows
        return None

    if relative == os.pardir or relative.startswith(os.pardir + os.sep):
        return None
    if relative == os.curdir:
        return ""
    return Path(relative).as_posix()


def _open_repo(root: Path) -> Repo:
    try:
        return Repo(root)
    except (InvalidGitRepositoryError, NoSuchPathError, OSError) as exc:
        raise RepositoryOpenError(f"Not a valid git repository: {root}") from exc


def _resolve_head(repo: Repo) -> Commit:
    try:
        return repo.head.commit
    except ValueError as exc:
        raise HeadResolutionError(
            f"HEAD does not point at a commit in {repo.working_dir}"
        ) from exc


def _entry_id(commit: Commit, rel_path: str) -> Optional[str]:
    """Object id stored at ``rel_path`` in the commit's tree, if any."""
    tree = commit.tree
    if not rel_path:
        return tree.hexsha
    try:
        return (tree / rel_path).hexsha
    except KeyError:
        return None


def _touches(commit: Commit, rel_path: str) -> bool:
    current = _entry_id(commit, rel_path)
    if not commit.parents:
        return current is not None
    # A merge that kept one parent's version unchanged did not touch the path.
    return all(_entry_id(parent, rel_path) != current for parent in commit.parents)


def read_history(
    file_path: StrPath,
    repo_root: StrPath,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[Commit]:
    """Return the commits that added, modified or removed ``file_path``.

    The walk starts at HEAD and inspects at most ``max_depth`` commits. The
    commits are GitPython objects, returned unchanged, most recent first.

    Parameters
    ----------
    file_path:
        Absolute path to the file whose history is read
    repo_root:
        Absolute path to the repository root
    max_depth:
        Maximum number of commits inspected during the walk

    Returns
    -------
    List of commits ordered by commit time, newest first. Empty when the
    file was never part of the history.
    """
    target = _absolute(file_path, "file path")
    root = _absolute(repo_root, "repository root")
    _check_depth(max_depth)

    if not _exists(target):
        raise NotFoundError(f"File does not exist: {target}")
    if not _exists(root):
        raise NotFoundError(f"Repository root does not exist: {root}")

    with _open_repo(root) as repo:
        head = _resolve_head(repo)

        rel_path = _relative_path(target, root)
        if rel_path is None:
            logger.debug("%s is outside repository %s", target, root)
            return []

        history: List[Commit] = []
        walked = 0
        for commit in repo.iter_commits(head, max_count=max_depth, date_order=True):
            walked += 1
            if _touches(commit, rel_path):
                history.append(commit)

        if walked >= max_depth:
            logger.debug(
                "History walk for %s stopped at max_depth=%d; result may be truncated",
                rel_path or ".",
                max_depth,
            )

        history.sort(key=lambda commit: commit.committed_date, reverse=True)

    logger.debug("Found %d commits touching %s in %s", len(history), rel_path or ".", root)
    return history


def git_history(
    file_path: StrPath,
    options: Optional[HistoryOptions] = None,
) -> List[Commit]:
    """Read the history of ``file_path`` from its enclosing repository.

    The repository root is discovered with :func:`resolve_root` unless
    ``options.repo_root`` supplies one. Errors from either step propagate
    unchanged.
    """
    active = options or HistoryOptions()
    target = _absolute(file_path, "file path")

    if active.repo_root is not None:
        root: StrPath = active.repo_root
    else:
        root = resolve_root(target)

    return read_history(target, root, active.max_depth)
