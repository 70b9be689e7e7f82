"""MCP tools package — re-exports all tool registrations."""

# Importing each module triggers @mcp.tool() registration
from blueprints.mcp.tools import (  # noqa: F401
    health,
    topics,
)
