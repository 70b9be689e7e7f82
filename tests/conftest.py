"""
Shared pytest fixtures for blueprints tests.

This module provides:
- Settings and environment isolation (no ``BLUEPRINTS_*`` leaks between tests)
- A small on-disk store with a two-draft topic, a single-draft topic and
  a topic missing canonical sections
- OperationContext fixtures wired to that store

Usage:
    def test_something(store, store_root):
        assert store.read_text("react") == (store_root / "stack/react.md").read_text()
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from blueprints.core.settings import clear_settings_cache
from blueprints.core.store import DocumentStore
from blueprints.ops.context import OperationContext
from tests._support.documents import NAMING_TEXT, PRISMA_TEXT, REACT_TEXT, write_doc

# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Drop ``BLUEPRINTS_*`` env vars and the settings cache around every test."""
    for name in list(os.environ):
        if name.startswith("BLUEPRINTS_"):
            monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Store fixtures
# =============================================================================


@pytest.fixture()
def store_root(tmp_path: Path) -> Path:
    """Store root with ``stack/react`` (stub + filled), ``stack/prisma`` and ``standards/naming``."""
    root = tmp_path / "blueprints"
    write_doc(root, "stack/react", REACT_TEXT)
    write_doc(root, "stack/prisma", PRISMA_TEXT)
    write_doc(root, "standards/naming", NAMING_TEXT)
    return root


@pytest.fixture()
def store(store_root: Path) -> DocumentStore:
    return DocumentStore(store_root)


@pytest.fixture()
def ctx(store: DocumentStore) -> OperationContext:
    """Default OperationContext wired to the fixture store."""
    return OperationContext(store=store, caller="test")


@pytest.fixture()
def dry_ctx(store: DocumentStore) -> OperationContext:
    """OperationContext with dry_run=True."""
    return OperationContext(store=store, caller="test", dry_run=True)
