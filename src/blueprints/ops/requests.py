"""
Typed request objects for operations.

Each dataclass represents the *input* contract for a single operation
function. Requests carry only validated, transport-agnostic data: no
Typer params, no MCP payloads.
"""

from __future__ import annotations

from dataclasses import dataclass

from blueprints.core.models import DraftPolicy


@dataclass(frozen=True, slots=True)
class ListTopicsRequest:
    """Request for :func:`blueprints.ops.topics.list_topics`."""

    category: str | None = None
    limit: int = 100
    offset: int = 0


@dataclass(frozen=True, slots=True)
class GetTopicRequest:
    """Request for :func:`blueprints.ops.topics.get_topic`.

    ``policy=None`` uses the context default policy.
    """

    topic: str
    policy: DraftPolicy | None = None


@dataclass(frozen=True, slots=True)
class SelectTopicsRequest:
    """Request for :func:`blueprints.ops.topics.select_topics`.

    Attributes:
        topics: Keys in the order they should appear in the output.
        policy: Draft policy applied to every topic; ``None`` uses the context default.
        with_sources: Prefix each document with a ``<!-- source: ... -->`` line.
    """

    topics: tuple[str, ...]
    policy: DraftPolicy | None = None
    with_sources: bool = False


@dataclass(frozen=True, slots=True)
class GetSectionRequest:
    """Request for :func:`blueprints.ops.topics.get_section`.

    ``draft`` is a zero-based draft index; ``None`` picks the last filled draft.
    """

    topic: str
    section: str
    draft: int | None = None


@dataclass(frozen=True, slots=True)
class NewTopicRequest:
    """Request for :func:`blueprints.ops.topics.new_topic`."""

    category: str
    topic: str
    title: str | None = None
