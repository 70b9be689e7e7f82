"""Transport scaffolding (MCP)."""
