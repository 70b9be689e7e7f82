"""Core primitives: document store, parser, selector, settings, errors and logging.

Quick start::

    from blueprints.core import DocumentSelector, DocumentStore, get_settings

    store = DocumentStore.from_settings(get_settings())
    print(DocumentSelector(store).get("react"))

Tags:
    blueprints, package-overview

Doc-Types:
    package-overview, module-index
"""

from .errors import (
    AmbiguousTopicError,
    BlueprintError,
    CategoryNotFoundError,
    ConfigError,
    DocumentExistsError,
    DocumentReadError,
    ErrorCategory,
    ErrorContext,
    InvalidTopicKeyError,
    NotFoundError,
    SectionNotFoundError,
    StorageError,
    StoreUnavailableError,
    TopicNotFoundError,
    ValidationError,
)
from .models import (
    CANONICAL_SECTIONS,
    ChangelogEntry,
    Draft,
    DraftKind,
    DraftMetadata,
    DraftPolicy,
    Section,
    TopicDocument,
    TopicRef,
)
from .selector import DocumentSelector, SelectionBundle, apply_policy
from .settings import BlueprintSettings, get_settings
from .store import DocumentStore, normalize_key

__all__ = [
    "AmbiguousTopicError",
    "BlueprintError",
    "BlueprintSettings",
    "CANONICAL_SECTIONS",
    "CategoryNotFoundError",
    "ChangelogEntry",
    "ConfigError",
    "DocumentExistsError",
    "DocumentReadError",
    "DocumentSelector",
    "DocumentStore",
    "Draft",
    "DraftKind",
    "DraftMetadata",
    "DraftPolicy",
    "ErrorCategory",
    "ErrorContext",
    "InvalidTopicKeyError",
    "NotFoundError",
    "Section",
    "SectionNotFoundError",
    "SelectionBundle",
    "StorageError",
    "StoreUnavailableError",
    "TopicDocument",
    "TopicNotFoundError",
    "TopicRef",
    "ValidationError",
    "apply_policy",
    "get_settings",
    "normalize_key",
]
