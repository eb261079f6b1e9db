"""MCP server exposing filehistory tools."""

from .server import FileHistoryServer, create_server

__all__ = ["FileHistoryServer", "create_server"]
