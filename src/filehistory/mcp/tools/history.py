"""Git history tools for the MCP server."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict

from ...config import HistoryConfig
from ...git.entry import HistoryEntry
from ...git.history import HistoryOptions, git_history, resolve_root

if TYPE_CHECKING:
    from ..server import FileHistoryServer


def file_history(config: HistoryConfig, args: Dict[str, Any]) -> str:
    """List the commits that touched a file.

    Parameters
    ----------
    config:
        Server configuration supplying the default traversal depth
    args:
        Tool arguments containing 'file_path' and optional 'repo_root',
        'max_depth', 'limit'

    Returns
    -------
    JSON string with the file's commits, newest first
    """
    file_path = args.get("file_path")
    if not file_path:
        return json.dumps({"error": "file_path required"}, indent=2)

    limit = args.get("limit")
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 1):
        return json.dumps({"error": "limit must be a positive integer"}, indent=2)

    repo_root = args.get("repo_root") or None
    max_depth = args.get("max_depth")
    if max_depth is None:
        max_depth = config.max_depth

    commits = git_history(file_path, HistoryOptions(repo_root=repo_root, max_depth=max_depth))
    if limit is not None:
        commits = commits[:limit]

    entries = [HistoryEntry.from_commit(commit).to_dict() for commit in commits]
    return json.dumps(
        {
            "file": str(file_path),
            "repo_root": str(repo_root or resolve_root(file_path)),
            "count": len(entries),
            "commits": entries,
        },
        indent=2,
    )


def repo_root_for_path(config: HistoryConfig, args: Dict[str, Any]) -> str:
    """Find the repository root that owns a path.

    Parameters
    ----------
    config:
        Server configuration (unused)
    args:
        Tool arguments containing 'path'

    Returns
    -------
    JSON string with the resolved root
    """
    path = args.get("path")
    if not path:
        return json.dumps({"error": "path required"}, indent=2)

    return json.dumps({"path": str(path), "repo_root": str(resolve_root(path))}, indent=2)


def register_tools(server: "FileHistoryServer") -> None:
    """Register history tools with the MCP server."""

    server.register_tool(
        name="git_history",
        description="List commits that added, modified or removed a file, newest first",
        input_schema={
            "type": "object",
            "properties": {
                "file_path": {"type": "string", "description": "Absolute path to the file"},
                "repo_root": {
                    "type": "string",
                    "description": "Repository root (optional, discovered when omitted)",
                },
                "max_depth": {
                    "type": "integer",
                    "description": "Maximum commits inspected during the walk (optional)",
                },
                "limit": {"type": "integer", "description": "Max results (optional)"},
            },
            "required": ["file_path"],
        },
        handler=file_history,
    )

    server.register_tool(
        name="resolve_repo_root",
        description="Find the closest git repository root above a path",
        input_schema={
            "type": "object",
            "properties": {
                "path": {"type": "string", "description": "Absolute file or directory path"},
            },
            "required": ["path"],
        },
        handler=repo_root_for_path,
    )
