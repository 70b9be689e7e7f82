"""Select topic documents and concatenate them for an assistant's context.

Stability: stable
Doc-Types: API_REFERENCE, TECHNICAL_DESIGN
Tags: blueprints, selector, concatenation, drafts

Two decisions live here:

* **Which drafts of one topic** - :class:`DraftPolicy`. ``all`` is the
  default and returns the file verbatim, drafts and separators included.
  ``latest`` and ``filled`` are opt-in reductions; nothing is reconciled
  unless the caller asks for it.
* **How several topics are combined** - every key is resolved before any
  text is produced, so a bad key fails the whole selection. Repeated keys
  are emitted once, at their first position.

Usage::

    from blueprints.core.selector import DocumentSelector

    selector = DocumentSelector(store)
    text = selector.get("react")
    bundle = selector.select(["react", "stack/prisma"], with_sources=True)
"""

from __future__ import annotations

from dataclasses import dataclass

from blueprints.core.logging import get_logger
from blueprints.core.models import DraftPolicy, TopicDocument, TopicRef
from blueprints.core.parser import join_drafts
from blueprints.core.store import DocumentStore

logger = get_logger(__name__)

DOCUMENT_JOINER = "\n"


def source_marker(ref: TopicRef) -> str:
    """HTML comment naming the file a block of text came from."""
    return f"<!-- source: {ref.filename} -->"


def apply_policy(document: TopicDocument, policy: DraftPolicy, separator: str) -> str:
    """Render one document under *policy*.

    ``all`` returns ``document.text`` byte-for-byte. ``filled`` falls back to
    every draft when all of them are stubs, so a topic never renders empty.
    """
    policy = DraftPolicy(policy)
    if policy is DraftPolicy.ALL or not document.drafts:
        return document.text
    if policy is DraftPolicy.LATEST:
        return document.drafts[-1].text

    chosen = document.filled_drafts or list(document.drafts)
    return join_drafts([d.text for d in chosen], separator)


@dataclass(frozen=True)
class SelectedDocument:
    """One rendered document within a selection."""

    ref: TopicRef
    text: str


@dataclass(frozen=True)
class SelectionBundle:
    """Ordered result of a multi-topic selection."""

    documents: tuple[SelectedDocument, ...]
    text: str

    @property
    def keys(self) -> list[str]:
        return [d.ref.key for d in self.documents]

    @property
    def size_bytes(self) -> int:
        return len(self.text.encode("utf-8"))


class DocumentSelector:
    """Turns topic keys into text using a :class:`DocumentStore`."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def render(self, ref: TopicRef, policy: DraftPolicy = DraftPolicy.ALL) -> str:
        """Read *ref* and apply *policy*. ``all`` skips parsing entirely."""
        if DraftPolicy(policy) is DraftPolicy.ALL:
            return self.store.read_ref(ref)
        document = self.store.load_ref(ref)
        return apply_policy(document, policy, self.store.draft_separator)

    def get(self, key: str, policy: DraftPolicy = DraftPolicy.ALL) -> str:
        """Return the text for one topic key."""
        return self.render(self.store.resolve(key), policy)

    def select(
        self,
        keys: list[str],
        policy: DraftPolicy = DraftPolicy.ALL,
        *,
        with_sources: bool = False,
    ) -> SelectionBundle:
        """Resolve all *keys*, then render and concatenate them in request order.

        Raises:
            ValueError: *keys* is empty.
            BlueprintError: any key fails to resolve or read; no bundle is built.
        """
        if not keys:
            raise ValueError("At least one topic key is required")

        refs: list[TopicRef] = []
        seen: set[str] = set()
        for key in keys:
            ref = self.store.resolve(key)
            if ref.key in seen:
                continue
            seen.add(ref.key)
            refs.append(ref)

        documents = tuple(SelectedDocument(ref=ref, text=self.render(ref, policy)) for ref in refs)

        blocks = []
        for doc in documents:
            block = doc.text if doc.text.endswith("\n") else doc.text + "\n"
            if with_sources:
                block = f"{source_marker(doc.ref)}\n{block}"
            blocks.append(block)

        bundle = SelectionBundle(documents=documents, text=DOCUMENT_JOINER.join(blocks))
        logger.info(
            "selection_built",
            keys=bundle.keys,
            policy=DraftPolicy(policy).value,
            size_bytes=bundle.size_bytes,
        )
        return bundle


__all__ = [
    "DocumentSelector",
    "SelectedDocument",
    "SelectionBundle",
    "apply_policy",
    "source_marker",
]
