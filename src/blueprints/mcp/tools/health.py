"""Health-check MCP tools."""

from __future__ import annotations

from typing import Any

from blueprints.mcp import _app

mcp = _app.mcp


@mcp.tool()
async def health_check() -> dict[str, Any]:
    """Check blueprint store health.

    Returns:
        Status (healthy, degraded, unavailable), topic count and issues
    """
    from blueprints.ops.context import OperationContext
    from blueprints.ops.health import check_store

    ctx = _app._get_context()
    if not ctx.initialized:
        return {
            "status": "unavailable",
            "error": ctx.error,
            "version": _app._get_version(),
        }

    result = check_store(OperationContext(store=ctx.store, caller="mcp"))
    if not result.success:
        return {
            "status": "unavailable",
            "error": result.error_message,
            "version": _app._get_version(),
        }

    return result.data.to_dict()
