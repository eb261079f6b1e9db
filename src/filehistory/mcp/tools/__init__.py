"""Tool handlers registered with the MCP server."""
