"""Topic document MCP tools and resources."""

from __future__ import annotations

from typing import Any

from blueprints.mcp import _app

mcp = _app.mcp

_NOT_INITIALIZED = "Blueprint store not initialized"


def _ctx():
    from blueprints.core.models import DraftPolicy
    from blueprints.ops.context import OperationContext

    app_ctx = _app._get_context()
    if not app_ctx.initialized:
        return None, app_ctx.error or _NOT_INITIALIZED
    ctx = OperationContext(
        store=app_ctx.store,
        caller="mcp",
        default_policy=DraftPolicy(app_ctx.default_policy),
    )
    return ctx, ""


def _policy(policy: str | None):
    """Parse an optional policy name; returns ``(policy, error_payload)``."""
    from blueprints.core.models import DraftPolicy

    if policy is None:
        return None, None
    try:
        return DraftPolicy(policy.strip().lower()), None
    except ValueError:
        choices = ", ".join(p.value for p in DraftPolicy)
        return None, {"error": f"Unknown policy {policy!r}; expected one of {choices}", "code": "VALIDATION_FAILED"}


@mcp.tool()
async def list_topics(category: str | None = None) -> dict[str, Any]:
    """List available best-practice topics.

    Args:
        category: Restrict to one category (stack, standards, security)

    Returns:
        Dictionary with 'topics' list and 'total' count
    """
    from blueprints.ops.requests import ListTopicsRequest
    from blueprints.ops.topics import list_topics as _list_topics

    ctx, error = _ctx()
    if ctx is None:
        return {"error": error, "topics": [], "total": 0}

    result = _list_topics(ctx, ListTopicsRequest(category=category, limit=1000))
    if not result.success:
        return {**_app._error_payload(result), "topics": [], "total": 0}

    return {
        "topics": [
            {
                "key": t.key,
                "category": t.category,
                "topic": t.topic,
                "drafts": t.drafts,
                "stub_drafts": t.stub_drafts,
                "size_bytes": t.size_bytes,
            }
            for t in result.items
        ],
        "total": result.total,
    }


@mcp.tool()
async def get_topic(topic: str, policy: str | None = None) -> dict[str, Any]:
    """Fetch a best-practice document by topic key.

    Args:
        topic: Topic key such as "react" or "stack/prisma"
        policy: "all" (verbatim file), "latest" (last draft) or "filled" (non-stub drafts);
            defaults to the server's configured policy

    Returns:
        Dictionary with 'key' and the document 'text'
    """
    from blueprints.ops.requests import GetTopicRequest
    from blueprints.ops.topics import get_topic as _get_topic

    ctx, error = _ctx()
    if ctx is None:
        return {"error": error}

    draft_policy, invalid = _policy(policy)
    if invalid:
        return invalid

    result = _get_topic(ctx, GetTopicRequest(topic=topic, policy=draft_policy))
    if not result.success:
        return _app._error_payload(result)

    return {
        "key": result.data.key,
        "policy": result.data.policy,
        "size_bytes": result.data.size_bytes,
        "text": result.data.text,
    }


@mcp.tool()
async def select_topics(
    topics: list[str],
    policy: str | None = None,
    with_sources: bool = True,
) -> dict[str, Any]:
    """Concatenate several best-practice documents into one context block.

    Args:
        topics: Topic keys in the order they should appear
        policy: "all", "latest" or "filled"; defaults to the server's configured policy
        with_sources: Prefix each document with a source comment

    Returns:
        Dictionary with the resolved 'keys' and concatenated 'text'
    """
    from blueprints.ops.requests import SelectTopicsRequest
    from blueprints.ops.topics import select_topics as _select_topics

    ctx, error = _ctx()
    if ctx is None:
        return {"error": error}

    draft_policy, invalid = _policy(policy)
    if invalid:
        return invalid

    request = SelectTopicsRequest(topics=tuple(topics), policy=draft_policy, with_sources=with_sources)
    result = _select_topics(ctx, request)
    if not result.success:
        return _app._error_payload(result)

    return {
        "keys": result.data.keys,
        "policy": result.data.policy,
        "size_bytes": result.data.size_bytes,
        "text": result.data.text,
    }


@mcp.tool()
async def describe_topic(topic: str) -> dict[str, Any]:
    """Describe the drafts stored for a topic (kind, sections, changelog).

    Args:
        topic: Topic key

    Returns:
        Draft structure without the document text
    """
    from dataclasses import asdict

    from blueprints.ops.topics import describe_topic as _describe_topic

    ctx, error = _ctx()
    if ctx is None:
        return {"error": error}

    result = _describe_topic(ctx, topic)
    if not result.success:
        return _app._error_payload(result)

    payload = asdict(result.data)
    if result.warnings:
        payload["warnings"] = result.warnings
    return payload


@mcp.tool()
async def get_section(topic: str, section: str, draft: int | None = None) -> dict[str, Any]:
    """Fetch one section of a document, e.g. "Anti-Patterns" or "Quick Reference".

    Args:
        topic: Topic key
        section: Section title (case-insensitive)
        draft: Zero-based draft index; defaults to the last filled draft

    Returns:
        Dictionary with the section 'text'
    """
    from blueprints.ops.requests import GetSectionRequest
    from blueprints.ops.topics import get_section as _get_section

    ctx, error = _ctx()
    if ctx is None:
        return {"error": error}

    result = _get_section(ctx, GetSectionRequest(topic=topic, section=section, draft=draft))
    if not result.success:
        payload = _app._error_payload(result)
        available = result.error.details.get("available") if result.error else None
        if available:
            payload["available"] = available
        return payload

    return {
        "key": result.data.key,
        "draft": result.data.draft,
        "section": result.data.section,
        "text": result.data.text,
    }


@mcp.resource("blueprint://{category}/{topic}")
async def topic_resource(category: str, topic: str) -> str:
    """Raw text of ``<category>/<topic>.md``."""
    from blueprints.core.errors import BlueprintError
    from blueprints.core.selector import DocumentSelector

    app_ctx = _app._get_context()
    if not app_ctx.initialized:
        raise ValueError(app_ctx.error or _NOT_INITIALIZED)
    try:
        return DocumentSelector(app_ctx.store).get(f"{category}/{topic}")
    except BlueprintError as exc:
        raise ValueError(exc.message) from exc
