"""blueprints MCP Server Implementation.

Exposes topic listing, retrieval, selection and section lookup as MCP
tools, plus a ``blueprint://{category}/{topic}`` resource template.

The shared state lives in `blueprints.mcp._app`; tool functions live in
`blueprints.mcp.tools.*`.

Tags: mcp, server, ai-tools, protocol
Doc-Types: API_REFERENCE, TECHNICAL_DESIGN
"""

from __future__ import annotations

from blueprints.mcp._app import (  # noqa: F401
    AppContext,
    _get_context,
    _get_version,
    lifespan,
    mcp,
)

# Import tools to trigger @mcp.tool() registration
from blueprints.mcp.tools.health import health_check  # noqa: F401
from blueprints.mcp.tools.topics import (  # noqa: F401
    describe_topic,
    get_section,
    get_topic,
    list_topics,
    select_topics,
    topic_resource,
)

from blueprints.core.transports.mcp import run_blueprint_mcp


def create_server():
    """Create and return the MCP server instance."""
    return mcp


def run():
    """Run the MCP server (entry point for console script)."""
    from blueprints.core.settings import get_settings

    settings = get_settings()
    run_blueprint_mcp(
        mcp,
        default_port=settings.mcp_port,
        default_host=settings.mcp_host,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    run()
