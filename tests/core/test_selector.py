"""Tests for blueprints.core.selector — draft policies and multi-topic concatenation."""

from __future__ import annotations

from pathlib import Path

import pytest

from blueprints.core.errors import InvalidTopicKeyError, TopicNotFoundError
from blueprints.core.models import DraftPolicy
from blueprints.core.selector import DocumentSelector, apply_policy, source_marker
from blueprints.core.store import DocumentStore
from tests._support.documents import (
    PRISMA_TEXT,
    REACT_FILLED,
    REACT_STUB,
    REACT_TEXT,
    write_doc,
)


@pytest.fixture()
def selector(store: DocumentStore) -> DocumentSelector:
    return DocumentSelector(store)


class TestApplyPolicy:
    def test_all_is_verbatim(self, store: DocumentStore):
        doc = store.load("react")
        assert apply_policy(doc, DraftPolicy.ALL, "<!-- draft -->") == REACT_TEXT

    def test_latest(self, store: DocumentStore):
        doc = store.load("react")
        assert apply_policy(doc, DraftPolicy.LATEST, "<!-- draft -->") == REACT_FILLED

    def test_filled(self, store: DocumentStore):
        doc = store.load("react")
        assert apply_policy(doc, DraftPolicy.FILLED, "<!-- draft -->") == REACT_FILLED

    def test_filled_falls_back_when_all_stubs(self, store_root: Path):
        text = REACT_STUB + "\n<!-- draft -->\n\n" + REACT_STUB
        write_doc(store_root, "stack/stubby", text)
        doc = DocumentStore(store_root).load("stubby")
        assert apply_policy(doc, DraftPolicy.FILLED, "<!-- draft -->") == text

    def test_accepts_string_policy(self, store: DocumentStore):
        doc = store.load("react")
        assert apply_policy(doc, "latest", "<!-- draft -->") == REACT_FILLED

    def test_empty_document(self, store_root: Path):
        write_doc(store_root, "stack/empty", "")
        doc = DocumentStore(store_root).load("empty")
        assert apply_policy(doc, DraftPolicy.LATEST, "<!-- draft -->") == ""


class TestGet:
    def test_default_is_full_file(self, selector: DocumentSelector):
        assert selector.get("react") == REACT_TEXT

    def test_first_line_is_title(self, selector: DocumentSelector):
        assert selector.get("react").splitlines()[0] == "# React Best Practices"

    def test_idempotent(self, selector: DocumentSelector):
        assert selector.get("react") == selector.get("stack/react")

    def test_latest_policy(self, selector: DocumentSelector):
        assert selector.get("react", DraftPolicy.LATEST) == REACT_FILLED

    def test_missing(self, selector: DocumentSelector):
        with pytest.raises(TopicNotFoundError):
            selector.get("nonexistent-topic")


class TestSelect:
    def test_single_key_matches_get(self, selector: DocumentSelector):
        assert selector.select(["react"]).text == selector.get("react")

    def test_request_order_and_joiner(self, selector: DocumentSelector):
        bundle = selector.select(["prisma", "react"])
        assert bundle.keys == ["stack/prisma", "stack/react"]
        assert bundle.text == PRISMA_TEXT + "\n" + REACT_TEXT

    def test_duplicates_emitted_once(self, selector: DocumentSelector):
        bundle = selector.select(["react", "stack/react", "prisma", "react.md"])
        assert bundle.keys == ["stack/react", "stack/prisma"]

    def test_with_sources(self, selector: DocumentSelector):
        bundle = selector.select(["react", "prisma"], with_sources=True)
        assert bundle.text == (
            "<!-- source: stack/react.md -->\n" + REACT_TEXT
            + "\n"
            + "<!-- source: stack/prisma.md -->\n" + PRISMA_TEXT
        )

    def test_missing_newline_added_between_documents(self, store_root: Path):
        write_doc(store_root, "stack/bare", "# Bare")
        bundle = DocumentSelector(DocumentStore(store_root)).select(["bare", "prisma"])
        assert bundle.text == "# Bare\n\n" + PRISMA_TEXT

    def test_policy_applies_to_every_topic(self, selector: DocumentSelector):
        bundle = selector.select(["react", "prisma"], DraftPolicy.LATEST)
        assert bundle.text == REACT_FILLED + "\n" + PRISMA_TEXT

    def test_bad_key_fails_whole_selection(self, selector: DocumentSelector):
        with pytest.raises(TopicNotFoundError):
            selector.select(["react", "vue"])
        with pytest.raises(InvalidTopicKeyError):
            selector.select(["react", "../etc"])

    def test_empty(self, selector: DocumentSelector):
        with pytest.raises(ValueError):
            selector.select([])

    def test_size_bytes_counts_utf8(self, selector: DocumentSelector):
        bundle = selector.select(["react"])
        assert bundle.size_bytes == len(REACT_TEXT.encode("utf-8"))
        assert bundle.size_bytes > len(REACT_TEXT)


def test_source_marker(store: DocumentStore):
    assert source_marker(store.resolve("naming")) == "<!-- source: standards/naming.md -->"
