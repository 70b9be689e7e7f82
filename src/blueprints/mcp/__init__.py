"""blueprints MCP Server.

Model Context Protocol (MCP) server exposing the blueprint store as
AI-callable tools, so an assistant can pull best-practice documents into
its own context.

Usage::

    # stdio mode (default)
    blueprints-mcp

    # HTTP mode
    blueprints-mcp --transport http --port 8110
"""

from blueprints.mcp.server import create_server, mcp, run

__all__ = [
    "create_server",
    "mcp",
    "run",
]
