"""Shared MCP application state — server instance, context, helpers.

Tags: mcp, server, internal
Doc-Types: TECHNICAL_DESIGN
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from blueprints.core.logging import get_logger
from blueprints.core.transports.mcp import create_blueprint_mcp

logger = get_logger("blueprints.mcp")


@dataclass
class AppContext:
    """Application context for MCP server."""

    store: Any = None  # DocumentStore
    default_policy: str = "all"
    initialized: bool = False
    error: str = ""


def _build_context() -> AppContext:
    from pydantic import ValidationError as SettingsValidationError

    from blueprints.core.errors import StoreUnavailableError
    from blueprints.core.settings import get_settings
    from blueprints.core.store import DocumentStore

    try:
        settings = get_settings()
        store = DocumentStore.from_settings(settings)
        store.ensure_available()
    except SettingsValidationError as e:
        return AppContext(error=f"Invalid configuration: {e}")
    except StoreUnavailableError as e:
        return AppContext(error=e.message)
    return AppContext(store=store, default_policy=settings.default_policy.value, initialized=True)


@asynccontextmanager
async def lifespan(server: Any = None):
    """MCP server lifespan manager."""
    ctx = _build_context()
    if ctx.initialized:
        logger.info("mcp_initialized", root=str(ctx.store.root))
    else:
        logger.warning("store_unavailable", error=ctx.error)
    yield ctx


# Create MCP server instance
mcp = create_blueprint_mcp(
    name="blueprints",
    instructions="""
Best-practice reference documents ("dev blueprints") for web development.

Capabilities:
- List available topics (react, prisma, playwright, tailwind, typescript, ...)
- Fetch a topic document verbatim, or only its latest / filled drafts
- Concatenate several topics into one context block
- Fetch a single section such as "Anti-Patterns" or "Quick Reference"

Fetch the blueprints for the technologies in the user's task before
writing code, and follow their Best Practices and Anti-Patterns.
""",
    lifespan=lifespan,
)


def _get_context() -> AppContext:
    """Get current MCP context."""
    return _build_context()


def _get_version() -> str:
    """Get blueprints version."""
    try:
        from blueprints import __version__

        return __version__
    except ImportError:
        return "unknown"


def _error_payload(result: Any) -> dict[str, Any]:
    """Shape a failed ``OperationResult`` as a tool response."""
    err = result.error
    payload: dict[str, Any] = {
        "error": err.message if err else "Unknown error",
        "code": err.code if err else "ERROR",
    }
    if err and err.details.get("candidates"):
        payload["candidates"] = err.details["candidates"]
    return payload
