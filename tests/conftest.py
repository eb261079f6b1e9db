from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from git import Actor, Commit, Repo

AUTHOR = Actor("Test Author", "author@example.com")
BASE_TIME = 1_600_000_000


def commit_files(
    repo: Repo,
    files: Dict[str, Optional[str]],
    message: str,
    when: int,
    parents: Optional[List[Commit]] = None,
    head: bool = True,
) -> Commit:
    """Write (or delete, for ``None``) ``files`` and commit them at ``when``.

    ``parents`` overrides the parent list (e.g. to build merges); ``head=False``
    leaves HEAD where it was.
    """
    work_tree = Path(repo.working_tree_dir)
    for rel_path, content in files.items():
        if content is None:
            repo.index.remove([rel_path], working_tree=True)
            continue
        target = work_tree / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        repo.index.add([rel_path])

    date = f"{when} +0000"
    return repo.index.commit(
        message,
        parent_commits=parents,
        head=head,
        author=AUTHOR,
        committer=AUTHOR,
        author_date=date,
        commit_date=date,
    )


@dataclass
class ScenarioRepo:
    root: Path
    repo: Repo
    c1: Commit
    c2: Commit
    c3: Commit

    @property
    def target(self) -> Path:
        return self.root / "src" / "a.txt"


@pytest.fixture
def scenario_repo(tmp_path: Path):
    """C1 creates src/a.txt, C2 touches src/b.txt, C3 modifies src/a.txt."""
    root = tmp_path / "repo"
    root.mkdir()
    repo = Repo.init(root)
    c1 = commit_files(repo, {"src/a.txt": "first\n"}, "C1: add a", BASE_TIME)
    c2 = commit_files(repo, {"src/b.txt": "other\n"}, "C2: add b", BASE_TIME + 100)
    c3 = commit_files(repo, {"src/a.txt": "second\n"}, "C3: change a", BASE_TIME + 200)
    try:
        yield ScenarioRepo(root=root, repo=repo, c1=c1, c2=c2, c3=c3)
    finally:
        repo.close()


def has_git_ancestor(path: Path) -> bool:
    return any((candidate / ".git").exists() for candidate in [path, *path.parents])
