"""MCP server exposing file history over stdio."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from ..config import HistoryConfig
from ..errors import GitHistoryError

logger = logging.getLogger(__name__)

ToolHandler = Callable[[HistoryConfig, Dict[str, Any]], str]


class FileHistoryServer:
    """MCP server for filehistory tools."""

    def __init__(self, config: HistoryConfig | None = None):
        self.config = config or HistoryConfig()
        self.server = Server("filehistory")
        self.tools: Dict[str, ToolHandler] = {}
        self.tool_metadata: Dict[str, tuple[str, Dict[str, Any]]] = {}

        # Register handlers once at initialization
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Set up MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[types.Tool]:
            return [
                types.Tool(
                    name=tool_name,
                    description=desc,
                    inputSchema=schema,
                )
                for tool_name, (desc, schema) in self.tool_metadata.items()
            ]

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict) -> list[types.TextContent]:
            return [types.TextContent(type="text", text=self.dispatch(name, arguments))]

    def dispatch(self, name: str, arguments: Dict[str, Any] | None) -> str:
        """Run a registered tool and return its text result.

        Failures raised by the history core are reported as ``Error: ...``
        text so the client sees which kind of failure occurred.
        """
        if name not in self.tools:
            raise ValueError(f"Unknown tool: {name}")

        handler = self.tools[name]
        try:
            return handler(self.config, arguments or {})
        except GitHistoryError as e:
            logger.info("Tool %s failed: %s", name, e)
            return f"Error: {type(e).__name__}: {e}"

    def register_tool(
        self,
        name: str,
        description: str,
        input_schema: Dict[str, Any],
        handler: ToolHandler,
    ) -> None:
        """Register an MCP tool.

        Parameters
        ----------
        name:
            Tool name
        description:
            Tool description
        input_schema:
            JSON schema for tool inputs
        handler:
            Function called with the server config and the tool arguments
        """
        self.tools[name] = handler
        self.tool_metadata[name] = (description, input_schema)

    async def run(self) -> None:
        """Run the MCP server with stdio transport."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def create_server(config: HistoryConfig | None = None) -> FileHistoryServer:
    """Create an MCP server with every filehistory tool registered."""
    server = FileHistoryServer(config)

    from .tools import history

    history.register_tools(server)

    return server
