"""
Operations layer for the blueprint store.

Transport-agnostic functions shared by the CLI and the MCP server. Each
operation takes an :class:`OperationContext`, returns an
:class:`OperationResult`, and turns :class:`BlueprintError` into a
structured failure instead of raising.
"""

from blueprints.ops.context import OperationContext
from blueprints.ops.result import OperationError, OperationResult, PagedResult

__all__ = [
    "OperationContext",
    "OperationError",
    "OperationResult",
    "PagedResult",
]
