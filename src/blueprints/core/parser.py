"""Parse topic documents into drafts, sections and changelog rows.

Stability: stable
Doc-Types: API_REFERENCE
Tags: blueprints, parser, markdown

A topic file may hold several drafts (typically a stub template followed
by a filled version) separated by a marker line. This module splits the
drafts, finds the ``##`` sections of each one, reads the free-text header
fields and the changelog table. Parsing is line-based and ignores anything
inside fenced code blocks, since the documents are full of example snippets
that contain ``#`` comments and ``|`` characters.

Usage::

    from blueprints.core.parser import parse_document, split_drafts

    drafts = split_drafts(text, separator="<!-- draft -->")
    doc = parse_document(ref, text, separator="<!-- draft -->")
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from .models import (
    CHANGELOG_HEADER,
    ChangelogEntry,
    Draft,
    DraftKind,
    DraftMetadata,
    Section,
    TopicDocument,
    TopicRef,
)

_FENCE_RE = re.compile(r"^\s*(```|~~~)")

# ATX heading; trailing closing hashes are dropped
_HEADING_RE = re.compile(r"^(?P<hashes>#{1,6})\s+(?P<title>.+?)\s*#*\s*$")

_TODO_RE = re.compile(r"\bTODO\b")

_LAST_UPDATED_RE = re.compile(
    r"^[>\s*_-]*last[ -]updated[*_\s]*:[*_\s]*(?P<value>.*?)\s*$",
    re.IGNORECASE,
)
_VERSIONS_RE = re.compile(
    r"^[>\s*_-]*(?:versions?|version range|covers)[*_\s]*:[*_\s]*(?P<value>.*?)\s*$",
    re.IGNORECASE,
)

_TABLE_RULE_RE = re.compile(r"^\|?\s*:?-{3,}:?\s*(\|\s*:?-{3,}:?\s*)*\|?$")
_CELL_SPLIT_RE = re.compile(r"(?<!\\)\|")

SECTION_LEVEL = 2


def _iter_lines(text: str) -> Iterator[tuple[str, bool]]:
    """Yield ``(line, in_code)`` pairs; fence lines themselves count as code."""
    in_code = False
    for line in text.splitlines():
        if _FENCE_RE.match(line):
            in_code = not in_code
            yield line, True
            continue
        yield line, in_code


def split_drafts(text: str, separator: str) -> list[str]:
    """Split raw file text into draft texts, in stored order.

    A separator is a line whose stripped content equals *separator* and
    which is not inside a fenced code block. Blank chunks (e.g. a file that
    starts with the marker) are dropped. Each returned draft has surrounding
    blank lines removed and ends with a single newline.
    """
    marker = separator.strip()
    chunks: list[list[str]] = [[]]
    for line, in_code in _iter_lines(text):
        if not in_code and line.strip() == marker:
            chunks.append([])
            continue
        chunks[-1].append(line)

    drafts = []
    for chunk in chunks:
        body = "\n".join(chunk).strip("\n")
        if body.strip():
            drafts.append(body + "\n")
    return drafts


def join_drafts(drafts: list[str], separator: str) -> str:
    """Inverse of :func:`split_drafts` for a subset of drafts."""
    marker = separator.strip()
    return f"\n{marker}\n\n".join(d.rstrip("\n") + "\n" for d in drafts)


def parse_title(text: str) -> str:
    """Return the first ``#`` heading outside code, or ``""``."""
    for line, in_code in _iter_lines(text):
        if in_code:
            continue
        match = _HEADING_RE.match(line)
        if match and len(match.group("hashes")) == 1:
            return match.group("title")
    return ""


def parse_sections(text: str, level: int = SECTION_LEVEL) -> list[Section]:
    """Split a draft into sections headed at *level*.

    A section runs until the next heading of the same or a higher level.
    Deeper headings stay inside the section body.
    """
    sections: list[Section] = []
    current_title: str | None = None
    body: list[str] = []

    def _flush() -> None:
        if current_title is not None:
            sections.append(Section(
                title=current_title,
                level=level,
                body="\n".join(body).strip("\n") + "\n",
            ))

    for line, in_code in _iter_lines(text):
        match = None if in_code else _HEADING_RE.match(line)
        if match and len(match.group("hashes")) <= level:
            _flush()
            body = []
            if len(match.group("hashes")) == level:
                current_title = match.group("title")
            else:
                current_title = None
            continue
        if current_title is not None:
            body.append(line)

    _flush()
    return sections


def parse_metadata(text: str) -> DraftMetadata:
    """Read ``Last updated`` and version-range fields from the preamble.

    Only lines before the first ``##`` section are considered.
    """
    last_updated = ""
    versions = ""
    for line, in_code in _iter_lines(text):
        if in_code:
            continue
        heading = _HEADING_RE.match(line)
        if heading and len(heading.group("hashes")) >= SECTION_LEVEL:
            break
        if not last_updated:
            match = _LAST_UPDATED_RE.match(line)
            if match:
                last_updated = match.group("value").strip("*_ ")
                continue
        if not versions:
            match = _VERSIONS_RE.match(line)
            if match:
                versions = match.group("value").strip("*_ ")
    return DraftMetadata(last_updated=last_updated, versions=versions)


def _normalize_row(line: str) -> str:
    return " ".join(line.split())


def _split_cells(line: str) -> list[str]:
    stripped = line.strip()
    if stripped.startswith("|"):
        stripped = stripped[1:]
    if stripped.endswith("|") and not stripped.endswith("\\|"):
        stripped = stripped[:-1]
    return [cell.strip().replace("\\|", "|") for cell in _CELL_SPLIT_RE.split(stripped)]


def parse_changelog(text: str) -> list[ChangelogEntry]:
    """Parse rows of the ``| Version | Date | Key Changes |`` table.

    Rows with fewer than three cells are skipped; extra cells are folded
    into ``changes``.
    """
    header = _normalize_row(CHANGELOG_HEADER)
    entries: list[ChangelogEntry] = []
    in_table = False

    for line, in_code in _iter_lines(text):
        if in_code:
            in_table = False
            continue
        stripped = line.strip()
        if not in_table:
            if _normalize_row(stripped) == header:
                in_table = True
            continue
        if not stripped.startswith("|"):
            in_table = False
            continue
        if _TABLE_RULE_RE.match(stripped):
            continue
        cells = _split_cells(stripped)
        if len(cells) < 3:
            continue
        entries.append(ChangelogEntry(
            version=cells[0],
            date=cells[1],
            changes=" | ".join(cells[2:]),
        ))
    return entries


def classify_draft(text: str) -> DraftKind:
    """A draft with a ``TODO`` marker outside fenced code is a stub."""
    for line, in_code in _iter_lines(text):
        if not in_code and _TODO_RE.search(line):
            return DraftKind.STUB
    return DraftKind.FILLED


def parse_draft(index: int, text: str) -> Draft:
    """Build a :class:`Draft` from one draft's text."""
    return Draft(
        index=index,
        text=text,
        title=parse_title(text),
        kind=classify_draft(text),
        metadata=parse_metadata(text),
        sections=tuple(parse_sections(text)),
        changelog=tuple(parse_changelog(text)),
    )


def parse_document(ref: TopicRef, text: str, *, separator: str) -> TopicDocument:
    """Parse raw file text into a :class:`TopicDocument`.

    The raw *text* is kept unchanged on the result.
    """
    drafts = tuple(
        parse_draft(i, body) for i, body in enumerate(split_drafts(text, separator))
    )
    return TopicDocument(ref=ref, text=text, drafts=drafts)


__all__ = [
    "classify_draft",
    "join_drafts",
    "parse_changelog",
    "parse_document",
    "parse_draft",
    "parse_metadata",
    "parse_sections",
    "parse_title",
    "split_drafts",
]
