"""
Structured error types for the blueprint store.

Every failure the store can produce is a ``BlueprintError`` subclass that
carries a category, a retryable flag, structured context and an optional
chained cause. The ops layer maps these to ``OperationResult`` codes, so
transports (CLI, MCP) never inspect exception messages.

Manifesto:
    - **Typed hierarchy:** ``TopicNotFoundError`` is not a bare ``KeyError``
    - **Explicit retry semantics:** nothing in a read-only file store retries
    - **Rich context:** errors carry the topic, category and path involved
    - **Error chaining:** ``OSError``/``UnicodeDecodeError`` kept as ``cause``

Architecture:
    ::

        ┌───────────────────────────────────────────────────────────┐
        │                     BlueprintError                         │
        │        (category, retryable, context, cause)               │
        ├───────────────────────────────────────────────────────────┤
        │  NotFoundError          ValidationError    StorageError    │
        │  (SOURCE)               (VALIDATION)       (STORAGE)       │
        │      │                      │                  │           │
        │  TopicNotFoundError    InvalidTopicKey    StoreUnavailable │
        │  CategoryNotFound      AmbiguousTopic     DocumentRead     │
        │  SectionNotFound                          DocumentExists   │
        │                                                            │
        │  ConfigError (CONFIG)                                      │
        └───────────────────────────────────────────────────────────┘

Examples:
    >>> error = TopicNotFoundError("Topic 'vue' not found").with_context(topic="vue")
    >>> error.context.topic
    'vue'
    >>> error.to_dict()["category"]
    'SOURCE'

Tags:
    error-handling, exception-hierarchy, error-context, blueprints

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    STORAGE = "STORAGE"           # Missing root, unreadable file
    SOURCE = "SOURCE"             # Requested document does not exist
    PARSE = "PARSE"               # Malformed document content
    VALIDATION = "VALIDATION"     # Bad topic key, ambiguous lookup
    CONFIG = "CONFIG"             # Invalid settings
    INTERNAL = "INTERNAL"         # Bugs, unexpected state
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        topic: Topic key as requested by the caller
        category: Category directory involved in the lookup
        path: Filesystem path that was being accessed
        operation: Name of the operation that failed
        metadata: Additional key-value pairs
    """

    topic: str | None = None
    category: str | None = None
    path: str | None = None
    operation: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["topic", "category", "path", "operation"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class BlueprintError(Exception):
    """
    Base exception for all blueprint store errors.

    Subclasses set ``default_category`` and ``default_retryable`` so callers
    only pass a message in the common case.

    Examples:
        >>> error = BlueprintError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.retryable
        False
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> BlueprintError:
        """
        Add context to this error (fluent API).

        Usage:
            raise TopicNotFoundError("missing").with_context(
                topic="vue",
                path="/docs/stack/vue.md",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }

        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict

        if self.cause is not None:
            result["cause"] = str(self.cause)

        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# NOT FOUND ERRORS
# =============================================================================


class NotFoundError(BlueprintError):
    """
    Requested document, category or section does not exist.

    Never retryable: the store is read-only, so a second read of the same
    key gives the same answer until someone edits the files.
    """

    default_category = ErrorCategory.SOURCE
    default_retryable = False


class TopicNotFoundError(NotFoundError):
    """No ``<topic>.md`` matches the requested key."""


class CategoryNotFoundError(NotFoundError):
    """The requested category directory does not exist."""


class SectionNotFoundError(NotFoundError):
    """The document exists but has no section with the requested title."""


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(BlueprintError):
    """
    Caller supplied an unusable value.

    Never retryable - the request must be fixed.
    """

    default_category = ErrorCategory.VALIDATION
    default_retryable = False

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


class InvalidTopicKeyError(ValidationError):
    """Topic key contains path traversal or characters outside ``[a-z0-9._-]``."""


class AmbiguousTopicError(ValidationError):
    """An unqualified key matches documents in more than one category."""

    def __init__(self, message: str, *, candidates: list[str] | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.candidates = list(candidates or [])

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["candidates"] = self.candidates
        return result


# =============================================================================
# STORAGE ERRORS
# =============================================================================


class StorageError(BlueprintError):
    """Filesystem-level failure while reading or writing documents."""

    default_category = ErrorCategory.STORAGE
    default_retryable = False


class StoreUnavailableError(StorageError):
    """The configured store root does not exist or is not a directory."""


class DocumentReadError(StorageError):
    """A document exists but could not be read or decoded as UTF-8."""


class DocumentExistsError(StorageError):
    """Scaffolding refused to overwrite an existing document."""


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(BlueprintError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


__all__ = [
    "AmbiguousTopicError",
    "BlueprintError",
    "CategoryNotFoundError",
    "ConfigError",
    "DocumentExistsError",
    "DocumentReadError",
    "ErrorCategory",
    "ErrorContext",
    "InvalidTopicKeyError",
    "NotFoundError",
    "SectionNotFoundError",
    "StorageError",
    "StoreUnavailableError",
    "TopicNotFoundError",
    "ValidationError",
]
