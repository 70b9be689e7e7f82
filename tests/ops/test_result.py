"""Tests for blueprints.ops.result — OperationResult, PagedResult, error codes."""

from __future__ import annotations

import pytest

from blueprints.core.errors import (
    AmbiguousTopicError,
    BlueprintError,
    CategoryNotFoundError,
    ConfigError,
    DocumentExistsError,
    DocumentReadError,
    ErrorCategory,
    InvalidTopicKeyError,
    SectionNotFoundError,
    StoreUnavailableError,
    TopicNotFoundError,
)
from blueprints.ops.result import OperationResult, PagedResult, error_code, start_timer


class TestOperationResult:
    def test_ok(self):
        result = OperationResult.ok({"a": 1}, warnings=["w"])
        assert result.success
        assert result.data == {"a": 1}
        assert result.error is None
        assert result.warnings == ["w"]
        assert result.error_message == ""

    def test_fail(self):
        result = OperationResult.fail("NOT_FOUND", "gone", details={"topic": "vue"})
        assert not result.success
        assert result.data is None
        assert result.error.code == "NOT_FOUND"
        assert result.error_message == "gone"
        assert result.error.details == {"topic": "vue"}

    def test_from_error(self):
        exc = TopicNotFoundError("Topic 'vue' not found").with_context(topic="vue")
        result = OperationResult.from_error(exc, elapsed_ms=1.5)
        assert result.error.code == "NOT_FOUND"
        assert result.error.category == ErrorCategory.SOURCE
        assert result.error.details == {"topic": "vue"}
        assert result.elapsed_ms == 1.5

    def test_from_error_carries_candidates(self):
        exc = AmbiguousTopicError("two", candidates=["stack/auth", "security/auth"])
        result = OperationResult.from_error(exc)
        assert result.error.code == "AMBIGUOUS"
        assert result.error.details["candidates"] == ["stack/auth", "security/auth"]

    def test_to_dict_success(self):
        d = OperationResult.ok("text", elapsed_ms=12.3456).to_dict()
        assert d == {"success": True, "data": "text", "elapsed_ms": 12.35}

    def test_to_dict_failure(self):
        d = OperationResult.fail("CONFLICT", "exists", details={"path": "/x"}).to_dict()
        assert d["success"] is False
        assert d["error"] == {
            "code": "CONFLICT",
            "message": "exists",
            "retryable": False,
            "details": {"path": "/x"},
        }


class TestPagedResult:
    def test_has_more(self):
        result = PagedResult.from_items([1, 2], total=5, limit=2, offset=0)
        assert result.has_more
        assert result.items == [1, 2]

    def test_last_page(self):
        result = PagedResult.from_items([5], total=5, limit=2, offset=4)
        assert not result.has_more

    def test_to_dict(self):
        d = PagedResult.from_items(["a"], total=1, limit=10).to_dict()
        assert d["total"] == 1
        assert d["limit"] == 10
        assert d["offset"] == 0
        assert d["has_more"] is False

    def test_from_error_keeps_type(self):
        result = PagedResult.from_error(CategoryNotFoundError("nope"))
        assert isinstance(result, PagedResult)
        assert not result.success
        assert result.items == []


@pytest.mark.parametrize(
    ("exc", "code"),
    [
        (TopicNotFoundError("x"), "NOT_FOUND"),
        (CategoryNotFoundError("x"), "NOT_FOUND"),
        (SectionNotFoundError("x"), "NOT_FOUND"),
        (AmbiguousTopicError("x"), "AMBIGUOUS"),
        (InvalidTopicKeyError("x"), "VALIDATION_FAILED"),
        (DocumentExistsError("x"), "CONFLICT"),
        (DocumentReadError("x"), "STORAGE"),
        (StoreUnavailableError("x"), "STORAGE"),
        (ConfigError("x"), "CONFIG"),
        (BlueprintError("x"), "INTERNAL"),
    ],
)
def test_error_code(exc, code):
    assert error_code(exc) == code


def test_timer():
    timer = start_timer()
    assert timer.elapsed_ms >= 0
