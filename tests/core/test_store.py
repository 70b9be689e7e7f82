"""Tests for blueprints.core.store — key validation, resolution and verbatim reads."""

from __future__ import annotations

from pathlib import Path

import pytest

from blueprints.core.errors import (
    AmbiguousTopicError,
    CategoryNotFoundError,
    DocumentReadError,
    InvalidTopicKeyError,
    StoreUnavailableError,
    TopicNotFoundError,
)
from blueprints.core.store import DocumentStore, normalize_key
from tests._support.documents import PRISMA_TEXT, REACT_TEXT, write_doc


class TestNormalizeKey:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("react", (None, "react")),
            ("React", (None, "react")),
            ("react.md", (None, "react")),
            ("stack/react", ("stack", "react")),
            ("stack/react.md", ("stack", "react")),
            (" stack/next.js ", ("stack", "next.js")),
            ("node_streams", (None, "node_streams")),
        ],
    )
    def test_valid(self, key, expected):
        assert normalize_key(key) == expected

    @pytest.mark.parametrize(
        "key",
        ["", "   ", "../etc/passwd", "/etc/passwd", "a/b/c", "stack/", "/react",
         "stack\\react", "re act", "stack/..", "..", ".hidden", "a..b"],
    )
    def test_invalid(self, key):
        with pytest.raises(InvalidTopicKeyError) as exc_info:
            normalize_key(key)
        assert exc_info.value.field == "topic"


class TestDiscovery:
    def test_missing_root(self, tmp_path: Path):
        store = DocumentStore(tmp_path / "nope")
        with pytest.raises(StoreUnavailableError):
            store.ensure_available()
        with pytest.raises(StoreUnavailableError):
            store.list_topics()

    def test_category_order_configured_first(self, store_root: Path):
        write_doc(store_root, "archive/legacy", "# Legacy\n")
        write_doc(store_root, "security/auth", "# Auth\n")
        store = DocumentStore(store_root)
        assert store.category_order() == ["stack", "standards", "security", "archive"]

    def test_custom_category_order(self, store_root: Path):
        store = DocumentStore(store_root, categories=["standards", "stack"])
        assert store.category_order() == ["standards", "stack"]

    def test_list_categories_includes_absent_configured(self, store: DocumentStore):
        assert store.list_categories() == [
            ("stack", True),
            ("standards", True),
            ("security", False),
        ]

    def test_list_topics_order(self, store: DocumentStore):
        keys = [ref.key for ref in store.list_topics()]
        assert keys == ["stack/prisma", "stack/react", "standards/naming"]

    def test_list_topics_by_category(self, store: DocumentStore):
        assert [ref.topic for ref in store.list_topics("stack")] == ["prisma", "react"]

    def test_list_topics_unknown_category(self, store: DocumentStore):
        with pytest.raises(CategoryNotFoundError):
            store.list_topics("frontend")

    def test_list_topics_rejects_traversal(self, store: DocumentStore):
        with pytest.raises(CategoryNotFoundError):
            store.list_topics("..")

    def test_non_markdown_files_ignored(self, store_root: Path):
        (store_root / "stack" / "notes.txt").write_text("x", encoding="utf-8")
        (store_root / "stack" / "Draft Ideas.md").write_text("x", encoding="utf-8")
        keys = [ref.key for ref in DocumentStore(store_root).list_topics("stack")]
        assert keys == ["stack/prisma", "stack/react"]


class TestResolve:
    def test_unqualified(self, store: DocumentStore, store_root: Path):
        ref = store.resolve("react")
        assert ref.key == "stack/react"
        assert ref.filename == "stack/react.md"
        assert ref.path == store_root / "stack" / "react.md"

    def test_qualified_and_suffix(self, store: DocumentStore):
        assert store.resolve("stack/react.md").key == "stack/react"
        assert store.resolve("naming").key == "standards/naming"

    def test_not_found(self, store: DocumentStore):
        with pytest.raises(TopicNotFoundError) as exc_info:
            store.resolve("nonexistent-topic")
        assert exc_info.value.context.topic == "nonexistent-topic"

    def test_qualified_wrong_category(self, store: DocumentStore):
        with pytest.raises(TopicNotFoundError):
            store.resolve("standards/react")

    def test_ambiguous(self, store_root: Path):
        write_doc(store_root, "security/react", "# React security\n")
        store = DocumentStore(store_root)
        with pytest.raises(AmbiguousTopicError) as exc_info:
            store.resolve("react")
        assert exc_info.value.candidates == ["stack/react", "security/react"]
        # Qualified keys still work
        assert store.resolve("security/react").category == "security"

    def test_invalid_key_checked_before_root(self, tmp_path: Path):
        store = DocumentStore(tmp_path / "nope")
        with pytest.raises(InvalidTopicKeyError):
            store.resolve("../secrets")

    def test_exists(self, store: DocumentStore):
        assert store.exists("react")
        assert not store.exists("vue")


class TestRead:
    def test_read_text_is_verbatim(self, store: DocumentStore):
        assert store.read_text("react") == REACT_TEXT
        assert store.read_text("stack/prisma") == PRISMA_TEXT

    def test_crlf_preserved(self, store_root: Path):
        raw = "# Windows\r\n\r\nline\r\n"
        write_doc(store_root, "stack/crlf", raw)
        assert DocumentStore(store_root).read_text("crlf") == raw

    def test_repeated_reads_identical(self, store: DocumentStore):
        assert store.read_text("react") == store.read_text("react")

    def test_invalid_utf8(self, store_root: Path):
        (store_root / "stack" / "broken.md").write_bytes(b"# Broken \xff\xfe\n")
        with pytest.raises(DocumentReadError) as exc_info:
            DocumentStore(store_root).read_text("broken")
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    def test_load_parses_drafts(self, store: DocumentStore):
        doc = store.load("react")
        assert doc.text == REACT_TEXT
        assert len(doc.drafts) == 2
        assert doc.drafts[0].is_stub
        assert not doc.drafts[1].is_stub

    def test_custom_separator(self, store_root: Path):
        write_doc(store_root, "stack/split", "# One\n\n===\n\n# Two\n")
        store = DocumentStore(store_root, draft_separator="===")
        assert len(store.load("split").drafts) == 2

    def test_path_for(self, store: DocumentStore, store_root: Path):
        assert store.path_for("stack", "vue") == store_root / "stack" / "vue.md"
        with pytest.raises(InvalidTopicKeyError):
            store.path_for("stack", "../vue")
