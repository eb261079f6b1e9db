"""Plain records describing commits for display and JSON output."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List

from git import Commit


@dataclass(slots=True)
class HistoryEntry:
    """Metadata about a single commit in a file's history."""

    commit_id: str
    parent_commit_ids: List[str]
    author: str
    author_email: str
    timestamp: datetime
    message: str

    @classmethod
    def from_commit(cls, commit: Commit) -> "HistoryEntry":
        return cls(
            commit_id=commit.hexsha,
            parent_commit_ids=[parent.hexsha for parent in commit.parents],
            author=str(commit.author.name),
            author_email=str(commit.author.email),
            timestamp=commit.committed_datetime,
            message=commit.message.strip(),
        )

    @property
    def short_id(self) -> str:
        return self.commit_id[:8]

    @property
    def summary(self) -> str:
        """First line of the commit message."""
        return self.message.splitlines()[0] if self.message else ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "commit": self.commit_id,
            "parents": list(self.parent_commit_ids),
            "author": self.author,
            "author_email": self.author_email,
            "timestamp": self.timestamp.isoformat(),
            "message": self.message,
        }
