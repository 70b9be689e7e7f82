"""Shared MCP server scaffold.

Builds the FastMCP instance with the project's conventions and provides
the console-script entry point that picks stdio or streamable-http.

Usage::

    from blueprints.core.transports.mcp import create_blueprint_mcp, run_blueprint_mcp

    mcp = create_blueprint_mcp(
        name="blueprints",
        instructions="Best-practice documents ...",
        lifespan=app_lifespan,
    )

    @mcp.tool()
    async def get_topic(...): ...

    def run():
        run_blueprint_mcp(mcp, default_port=8110)
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import Any

from mcp.server.fastmcp import FastMCP

from blueprints.core.logging import configure_logging, get_logger


def create_blueprint_mcp(
    name: str,
    instructions: str,
    lifespan: Callable[..., Any],
) -> FastMCP:
    """Create a FastMCP server instance.

    Parameters
    ----------
    name : str
        MCP server name.
    instructions : str
        Natural language description of the server's capabilities.
    lifespan : async context manager
        Lifespan factory that yields an AppContext dataclass.

    Returns
    -------
    FastMCP
        Configured server instance; register tools/resources on it.
    """
    return FastMCP(
        name,
        instructions=instructions,
        lifespan=lifespan,
    )


def run_blueprint_mcp(
    mcp: FastMCP,
    *,
    default_port: int = 8110,
    default_host: str = "127.0.0.1",
    log_level: str = "INFO",
    argv: list[str] | None = None,
) -> None:
    """Standard entry point for the MCP console script.

    Parses ``--transport`` and ``--port`` from *argv* (``sys.argv[1:]`` by
    default) and starts the server in either stdio or streamable-http mode.
    Logs always go to stderr; in stdio mode stdout carries the protocol.
    """
    transport = "stdio"
    port = default_port
    args = sys.argv[1:] if argv is None else argv

    i = 0
    while i < len(args):
        if args[i] in ("--transport", "-t") and i + 1 < len(args):
            transport = args[i + 1]
            i += 2
        elif args[i] in ("--port", "-p") and i + 1 < len(args):
            port = int(args[i + 1])
            i += 2
        else:
            i += 1

    configure_logging(level=log_level, json_format=True, service=f"{mcp.name}-mcp")
    logger = get_logger(__name__)

    if transport in ("http", "streamable-http"):
        mcp.settings.host = default_host
        mcp.settings.port = port
        logger.info("mcp_starting", server=mcp.name, transport="streamable-http", port=port)
        mcp.run(transport="streamable-http")
    else:
        logger.info("mcp_starting", server=mcp.name, transport="stdio")
        mcp.run(transport="stdio")
