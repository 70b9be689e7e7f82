"""
Document store - topic key lookup over a directory of Markdown files.

The store maps topic keys to ``<root>/<category>/<topic>.md`` files. It is
read-only from a consumer's point of view: every lookup is a single
synchronous file read, and the only state held is the immutable root path
and category order.

Manifesto:
    - **Verbatim:** ``read_text`` returns the file exactly as stored
    - **Fail closed:** unknown keys raise ``TopicNotFoundError``, nothing partial
    - **Validated keys:** no key ever reaches the filesystem unchecked
    - **Stable order:** listings and category search order are deterministic

Architecture:
    ::

        <root>/
        ├── stack/              ← searched first
        │   ├── react.md
        │   └── prisma.md
        ├── standards/          ← optional
        ├── security/           ← optional
        └── <other>/            ← searched after configured ones, alphabetically

        resolve("react")        → stack/react.md
        resolve("stack/react")  → stack/react.md
        resolve("../etc")       → InvalidTopicKeyError
        resolve("vue")          → TopicNotFoundError

Examples:
    >>> store = DocumentStore(Path("src/blueprints/library"))
    >>> store.read_text("react").startswith("# React")
    True
    >>> [ref.key for ref in store.list_topics()][:2]
    ['stack/playwright', 'stack/prisma']

Guardrails:
    ❌ DON'T: Join user input onto the root path before validating it
    ✅ DO: Go through ``resolve()``, which validates first

    ❌ DON'T: Merge or dedupe drafts while reading
    ✅ DO: Return raw text; draft selection is the selector's job

Tags:
    store, markdown, topic-lookup, read-only, blueprints

Doc-Types:
    - API Reference
    - Technical Design
"""

from __future__ import annotations

import re
from pathlib import Path

from blueprints.core.errors import (
    AmbiguousTopicError,
    CategoryNotFoundError,
    DocumentReadError,
    InvalidTopicKeyError,
    StoreUnavailableError,
    TopicNotFoundError,
)
from blueprints.core.logging import get_logger
from blueprints.core.models import TopicDocument, TopicRef
from blueprints.core.parser import parse_document
from blueprints.core.settings import (
    DEFAULT_CATEGORIES,
    DEFAULT_DRAFT_SEPARATOR,
    BlueprintSettings,
)

logger = get_logger(__name__)

DOCUMENT_SUFFIX = ".md"

_NAME_RE = re.compile(r"^[a-z0-9][a-z0-9._-]*$")


def normalize_key(key: str) -> tuple[str | None, str]:
    """Validate a topic key and split it into ``(category, topic)``.

    Accepts ``topic``, ``category/topic`` and either form with a trailing
    ``.md``. Keys are case-insensitive.

    Raises:
        InvalidTopicKeyError: empty keys, absolute paths, ``..`` segments,
            more than one ``/`` or characters outside ``[a-z0-9._-]``.
    """
    raw = key
    key = key.strip().lower()
    if key.endswith(DOCUMENT_SUFFIX):
        key = key[: -len(DOCUMENT_SUFFIX)]

    parts = key.split("/")
    if not key or len(parts) > 2 or "\\" in key:
        raise InvalidTopicKeyError(
            f"Invalid topic key {raw!r}: expected 'topic' or 'category/topic'",
            field="topic",
            value=raw,
        )
    for part in parts:
        if part in ("", ".", "..") or ".." in part or not _NAME_RE.match(part):
            raise InvalidTopicKeyError(
                f"Invalid topic key {raw!r}: segments must match [a-z0-9._-]",
                field="topic",
                value=raw,
            )

    if len(parts) == 2:
        return parts[0], parts[1]
    return None, parts[0]


class DocumentStore:
    """Read-only lookup of topic documents under a root directory."""

    def __init__(
        self,
        root: Path,
        *,
        categories: list[str] | None = None,
        draft_separator: str = DEFAULT_DRAFT_SEPARATOR,
    ) -> None:
        self.root = Path(root)
        self.categories = list(categories if categories is not None else DEFAULT_CATEGORIES)
        self.draft_separator = draft_separator

    @classmethod
    def from_settings(cls, settings: BlueprintSettings) -> DocumentStore:
        return cls(
            settings.resolved_root(),
            categories=settings.categories,
            draft_separator=settings.draft_separator,
        )

    def __repr__(self) -> str:
        return f"DocumentStore(root={str(self.root)!r}, categories={self.categories!r})"

    # ------------------------------------------------------------------ #
    # Discovery
    # ------------------------------------------------------------------ #

    def ensure_available(self) -> None:
        """Raise :class:`StoreUnavailableError` if the root is not a directory."""
        if not self.root.is_dir():
            raise StoreUnavailableError(
                f"Blueprint store root {str(self.root)!r} does not exist or is not a directory"
            ).with_context(path=str(self.root))

    def category_order(self) -> list[str]:
        """Categories present on disk: configured ones first, then the rest alphabetically."""
        self.ensure_available()
        present = sorted(
            p.name for p in self.root.iterdir()
            if p.is_dir() and _NAME_RE.match(p.name)
        )
        ordered = [c for c in self.categories if c in present]
        ordered.extend(c for c in present if c not in ordered)
        return ordered

    def list_categories(self) -> list[tuple[str, bool]]:
        """All known categories as ``(name, present_on_disk)`` pairs."""
        present = self.category_order()
        names = list(self.categories) + [c for c in present if c not in self.categories]
        return [(name, name in present) for name in names]

    def list_topics(self, category: str | None = None) -> list[TopicRef]:
        """List topic refs, grouped by category order and sorted by topic within each."""
        if category is not None:
            category = category.strip().lower()
            if not (self.root / category).is_dir() or not _NAME_RE.match(category):
                self.ensure_available()
                raise CategoryNotFoundError(
                    f"Category {category!r} not found"
                ).with_context(category=category, path=str(self.root))
            categories = [category]
        else:
            categories = self.category_order()

        refs: list[TopicRef] = []
        for name in categories:
            directory = self.root / name
            for path in sorted(directory.glob(f"*{DOCUMENT_SUFFIX}")):
                topic = path.name[: -len(DOCUMENT_SUFFIX)]
                if path.is_file() and _NAME_RE.match(topic):
                    refs.append(TopicRef(category=name, topic=topic, path=path))
        return refs

    # ------------------------------------------------------------------ #
    # Lookup
    # ------------------------------------------------------------------ #

    def resolve(self, key: str) -> TopicRef:
        """Resolve a topic key to exactly one document.

        Raises:
            InvalidTopicKeyError: malformed key.
            TopicNotFoundError: no document matches.
            AmbiguousTopicError: an unqualified key exists in several categories.
            StoreUnavailableError: the root directory is missing.
        """
        category, topic = normalize_key(key)
        self.ensure_available()

        if category is not None:
            path = self.root / category / f"{topic}{DOCUMENT_SUFFIX}"
            if path.is_file():
                return TopicRef(category=category, topic=topic, path=path)
            logger.info("topic_not_found", topic=key, category=category)
            raise TopicNotFoundError(
                f"Topic {key!r} not found"
            ).with_context(topic=key, category=category, path=str(path))

        matches = [
            TopicRef(category=name, topic=topic, path=self.root / name / f"{topic}{DOCUMENT_SUFFIX}")
            for name in self.category_order()
            if (self.root / name / f"{topic}{DOCUMENT_SUFFIX}").is_file()
        ]
        if not matches:
            logger.info("topic_not_found", topic=key)
            raise TopicNotFoundError(f"Topic {key!r} not found").with_context(topic=key)
        if len(matches) > 1:
            candidates = [m.key for m in matches]
            raise AmbiguousTopicError(
                f"Topic {key!r} exists in several categories: {', '.join(candidates)}",
                field="topic",
                value=key,
                candidates=candidates,
            ).with_context(topic=key)
        return matches[0]

    def exists(self, key: str) -> bool:
        try:
            self.resolve(key)
        except (TopicNotFoundError, AmbiguousTopicError):
            return False
        return True

    def read_ref(self, ref: TopicRef) -> str:
        """Read a resolved document's text, decoded as UTF-8 and otherwise untouched."""
        try:
            # newline="" keeps CRLF files byte-identical on every platform
            with ref.path.open(encoding="utf-8", newline="") as fh:
                text = fh.read()
        except FileNotFoundError as exc:
            raise TopicNotFoundError(
                f"Topic {ref.key!r} disappeared while reading", cause=exc
            ).with_context(topic=ref.key, path=str(ref.path)) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentReadError(
                f"Could not read {ref.filename}: {exc}", cause=exc
            ).with_context(topic=ref.key, path=str(ref.path)) from exc

        logger.debug("topic_read", topic=ref.key, size_bytes=len(text.encode("utf-8")))
        return text

    def read_text(self, key: str) -> str:
        """Return the full raw text stored for *key*."""
        return self.read_ref(self.resolve(key))

    def load(self, key: str) -> TopicDocument:
        """Read and parse the document stored for *key*."""
        ref = self.resolve(key)
        return self.load_ref(ref)

    def load_ref(self, ref: TopicRef) -> TopicDocument:
        return parse_document(ref, self.read_ref(ref), separator=self.draft_separator)

    def path_for(self, category: str, topic: str) -> Path:
        """Validated path where ``category/topic`` would live (may not exist)."""
        category_name, topic_name = normalize_key(f"{category}/{topic}")
        assert category_name is not None
        return self.root / category_name / f"{topic_name}{DOCUMENT_SUFFIX}"


__all__ = ["DOCUMENT_SUFFIX", "DocumentStore", "normalize_key"]
