"""Tests for blueprints.ops.context."""

from pathlib import Path

from blueprints.core.models import DraftPolicy
from blueprints.core.settings import BUNDLED_LIBRARY, BlueprintSettings
from blueprints.core.store import DocumentStore
from blueprints.ops.context import OperationContext


def test_defaults(store: DocumentStore):
    ctx = OperationContext(store=store)
    assert ctx.caller == "sdk"
    assert ctx.dry_run is False
    assert ctx.request_id
    assert OperationContext(store=store).request_id != ctx.request_id


def test_from_settings(tmp_path: Path):
    settings = BlueprintSettings(
        root=tmp_path, categories=["standards"], draft_separator="===", default_policy="filled"
    )
    ctx = OperationContext.from_settings(settings, caller="cli", dry_run=True)
    assert ctx.store.root == tmp_path.resolve()
    assert ctx.store.categories == ["standards"]
    assert ctx.store.draft_separator == "==="
    assert ctx.caller == "cli"
    assert ctx.dry_run is True
    assert ctx.default_policy is DraftPolicy.FILLED


def test_from_cached_settings():
    ctx = OperationContext.from_settings()
    assert ctx.store.root == BUNDLED_LIBRARY
