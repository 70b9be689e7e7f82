"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument. The context carries the document store, caller identity, dry-run
flag, and arbitrary metadata.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from blueprints.core.models import DraftPolicy
from blueprints.core.settings import BlueprintSettings, get_settings
from blueprints.core.store import DocumentStore


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        store: The :class:`DocumentStore` to read from.
        request_id: Unique ID for this operation invocation (auto-generated).
        caller: Origin of the request: ``"cli"``, ``"mcp"`` or ``"sdk"``.
        dry_run: When ``True``, write operations return a preview without side effects.
        default_policy: Draft policy used when a request does not name one.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    store: DocumentStore
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    dry_run: bool = False
    default_policy: DraftPolicy = DraftPolicy.ALL
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_settings(
        cls,
        settings: BlueprintSettings | None = None,
        *,
        caller: str = "sdk",
        dry_run: bool = False,
    ) -> OperationContext:
        """Build a context whose store is configured from *settings*."""
        settings = settings or get_settings()
        return cls(
            store=DocumentStore.from_settings(settings),
            caller=caller,
            dry_run=dry_run,
            default_policy=settings.default_policy,
        )
