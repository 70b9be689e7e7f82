"""Data models for topic documents.

Stability: stable
Doc-Types: API_REFERENCE
Tags: blueprints, model, dataclass

Plain dataclasses describing a stored topic document, the drafts it holds
and the presentational sections inside each draft. Nothing here touches
the filesystem; :mod:`blueprints.core.store` builds these from files and
:mod:`blueprints.core.parser` fills in the parsed structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

# ---------------------------------------------------------------------------
# Controlled vocabularies
# ---------------------------------------------------------------------------


class DraftKind(str, Enum):
    """Whether a draft is a placeholder or real content."""

    STUB = "stub"
    FILLED = "filled"


class DraftPolicy(str, Enum):
    """Which drafts of one topic are emitted by the selector."""

    ALL = "all"
    LATEST = "latest"
    FILLED = "filled"


#: Canonical section order of every topic document.
CANONICAL_SECTIONS: tuple[str, ...] = (
    "Philosophy",
    "TL;DR",
    "Best Practices",
    "Anti-Patterns",
    "Changelog",
    "Quick Reference",
    "Resources",
)

#: Header row of the changelog table, as written in the documents.
CHANGELOG_HEADER = "| Version | Date | Key Changes |"


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TopicRef:
    """Location of one topic document inside the store."""

    category: str
    topic: str
    path: Path

    @property
    def key(self) -> str:
        """Qualified key, e.g. ``stack/react``."""
        return f"{self.category}/{self.topic}"

    @property
    def filename(self) -> str:
        return f"{self.category}/{self.topic}.md"


@dataclass(frozen=True)
class Section:
    """A heading and the Markdown below it, up to the next heading of the same or higher level."""

    title: str
    level: int
    body: str

    @property
    def text(self) -> str:
        """Section rendered back to Markdown, heading included."""
        heading = f"{'#' * self.level} {self.title}"
        return f"{heading}\n{self.body}".rstrip() + "\n"


@dataclass(frozen=True)
class ChangelogEntry:
    """One row of the ``| Version | Date | Key Changes |`` table."""

    version: str
    date: str
    changes: str


@dataclass(frozen=True)
class DraftMetadata:
    """Free-text header fields found under the document title."""

    last_updated: str = ""
    versions: str = ""


@dataclass(frozen=True)
class Draft:
    """One version of a topic document, as stored between separator lines."""

    index: int
    text: str
    title: str = ""
    kind: DraftKind = DraftKind.FILLED
    metadata: DraftMetadata = field(default_factory=DraftMetadata)
    sections: tuple[Section, ...] = ()
    changelog: tuple[ChangelogEntry, ...] = ()

    @property
    def is_stub(self) -> bool:
        return self.kind is DraftKind.STUB

    @property
    def section_titles(self) -> list[str]:
        return [s.title for s in self.sections]

    def find_section(self, title: str) -> Section | None:
        """Case-insensitive section lookup by title."""
        wanted = title.strip().lower()
        for section in self.sections:
            if section.title.lower() == wanted:
                return section
        return None

    def missing_sections(self) -> list[str]:
        """Canonical sections absent from this draft."""
        present = {t.lower() for t in self.section_titles}
        return [name for name in CANONICAL_SECTIONS if name.lower() not in present]


@dataclass(frozen=True)
class TopicDocument:
    """A topic file: its raw text plus the drafts parsed from it.

    ``text`` is the file content exactly as read; drafts never replace it.
    """

    ref: TopicRef
    text: str
    drafts: tuple[Draft, ...] = ()

    @property
    def key(self) -> str:
        return self.ref.key

    @property
    def size_bytes(self) -> int:
        return len(self.text.encode("utf-8"))

    @property
    def stub_drafts(self) -> list[Draft]:
        return [d for d in self.drafts if d.is_stub]

    @property
    def filled_drafts(self) -> list[Draft]:
        return [d for d in self.drafts if not d.is_stub]

    @property
    def has_multiple_drafts(self) -> bool:
        return len(self.drafts) > 1


__all__ = [
    "CANONICAL_SECTIONS",
    "CHANGELOG_HEADER",
    "ChangelogEntry",
    "Draft",
    "DraftKind",
    "DraftMetadata",
    "DraftPolicy",
    "Section",
    "TopicDocument",
    "TopicRef",
]
