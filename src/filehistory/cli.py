"""Command line utilities for reading a file's git history."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Iterable

from .config import HistoryConfig
from .errors import GitHistoryError
from .git.entry import HistoryEntry
from .git.history import HistoryOptions, git_history, resolve_root
from .log import configure_logging


def _resolve_config(args: argparse.Namespace) -> HistoryConfig:
    config = HistoryConfig.load(args.config)
    if args.verbose:
        config.log_level = "DEBUG"
    return config


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


def _absolute(path: Path) -> Path:
    return path if path.is_absolute() else Path.cwd() / path


def _log(args: argparse.Namespace, config: HistoryConfig) -> int:
    file_path = _absolute(args.file)
    repo_root = _absolute(args.repo_root) if args.repo_root else None
    max_depth = args.max_depth if args.max_depth is not None else config.max_depth

    commits = git_history(file_path, HistoryOptions(repo_root=repo_root, max_depth=max_depth))
    if args.limit is not None:
        commits = commits[: args.limit]
    entries = [HistoryEntry.from_commit(commit) for commit in commits]

    if args.json:
        print(
            json.dumps(
                {
                    "file": str(file_path),
                    "repo_root": str(repo_root or resolve_root(file_path)),
                    "count": len(entries),
                    "commits": [entry.to_dict() for entry in entries],
                },
                indent=2,
            )
        )
        return 0

    if not entries:
        print(f"No commits touch {file_path}")
        return 0

    for entry in entries:
        print(f"{entry.short_id}  {entry.timestamp.isoformat()}  {entry.author}  {entry.summary}")
    return 0


def _root(args: argparse.Namespace, config: HistoryConfig) -> int:
    print(resolve_root(_absolute(args.path)))
    return 0


def _serve_mcp(args: argparse.Namespace, config: HistoryConfig) -> int:
    """Start the MCP server."""
    from .mcp.server import create_server

    print("Starting filehistory MCP server on stdio. Use Ctrl+C to stop.", file=sys.stderr)
    try:
        asyncio.run(create_server(config).run())
    except KeyboardInterrupt:
        print("\nShutting down server...", file=sys.stderr)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="filehistory", description=__doc__)
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a JSON config file (defaults to ~/.filehistory/config.json)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    log_parser = subparsers.add_parser("log", help="List commits that touched a file")
    log_parser.add_argument("file", type=Path, help="File whose history is read")
    log_parser.add_argument(
        "--repo-root",
        type=Path,
        help="Repository root to read from instead of discovering one",
    )
    log_parser.add_argument(
        "--max-depth",
        type=_positive_int,
        help="Maximum number of commits inspected during the walk",
    )
    log_parser.add_argument("--limit", type=_positive_int, help="Show at most this many commits")
    log_parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    log_parser.set_defaults(func=_log)

    root_parser = subparsers.add_parser("root", help="Print the repository root above a path")
    root_parser.add_argument("path", type=Path, help="File or directory")
    root_parser.set_defaults(func=_root)

    serve_parser = subparsers.add_parser("serve", help="Start the MCP server")
    serve_parser.set_defaults(func=_serve_mcp)

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    config = _resolve_config(args)
    configure_logging(config.log_level, json_format=config.json_logs)

    try:
        return args.func(args, config)
    except GitHistoryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
