"""
Typed response objects for operations.

Each dataclass represents the *output* of a single operation beyond the
generic :class:`OperationResult` envelope. Responses carry only domain
data: no exit codes, no Rich formatting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ------------------------------------------------------------------ #
# Topic responses
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class TopicSummary:
    """Row of :func:`blueprints.ops.topics.list_topics`."""

    key: str
    category: str
    topic: str
    drafts: int
    stub_drafts: int
    size_bytes: int


@dataclass(frozen=True, slots=True)
class CategorySummary:
    """Row of :func:`blueprints.ops.topics.list_categories`."""

    name: str
    topics: int
    present: bool


@dataclass(frozen=True, slots=True)
class TopicText:
    """Payload of :func:`blueprints.ops.topics.get_topic`."""

    key: str
    policy: str
    text: str
    size_bytes: int


@dataclass(frozen=True, slots=True)
class Selection:
    """Payload of :func:`blueprints.ops.topics.select_topics`."""

    keys: list[str]
    policy: str
    text: str
    size_bytes: int


@dataclass(frozen=True, slots=True)
class DraftDetail:
    """One draft within :class:`TopicDetail`."""

    index: int
    kind: str
    title: str
    last_updated: str
    versions: str
    sections: list[str]
    missing_sections: list[str]
    changelog: list[dict[str, str]] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class TopicDetail:
    """Payload of :func:`blueprints.ops.topics.describe_topic`."""

    key: str
    path: str
    size_bytes: int
    drafts: list[DraftDetail]


@dataclass(frozen=True, slots=True)
class SectionText:
    """Payload of :func:`blueprints.ops.topics.get_section`."""

    key: str
    draft: int
    section: str
    text: str


@dataclass(frozen=True, slots=True)
class NewTopicResult:
    """Payload of :func:`blueprints.ops.topics.new_topic`."""

    key: str
    path: str
    created: bool
    dry_run: bool = False


# ------------------------------------------------------------------ #
# Health responses
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class StoreIssue:
    """A problem found while scanning the store."""

    key: str
    kind: str  # "multiple_drafts", "stub_only", "missing_sections", "unreadable"
    message: str


@dataclass(slots=True)
class StoreReport:
    """Payload of :func:`blueprints.ops.health.check_store`."""

    root: str
    status: str  # "healthy", "degraded", "unavailable"
    topics: int = 0
    categories: list[str] = field(default_factory=list)
    issues: list[StoreIssue] = field(default_factory=list)
    version: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "status": self.status,
            "topics": self.topics,
            "categories": self.categories,
            "issues": [
                {"key": i.key, "kind": i.kind, "message": i.message} for i in self.issues
            ],
            "version": self.version,
        }
