"""
Store health operations.

Scans every document once and reports what a maintainer should look at:
topics holding several drafts, topics with only stub drafts, filled drafts
missing canonical sections, and files that cannot be read. Issues degrade
the status; only a missing root makes the store unavailable.
"""

from __future__ import annotations

from blueprints.core.errors import BlueprintError, StorageError, StoreUnavailableError
from blueprints.core.logging import get_logger
from blueprints.ops.context import OperationContext
from blueprints.ops.responses import StoreIssue, StoreReport
from blueprints.ops.result import OperationResult, start_timer

logger = get_logger(__name__)


def _version() -> str:
    from blueprints import __version__

    return __version__


def check_store(ctx: OperationContext) -> OperationResult[StoreReport]:
    """Scan the store and report its status."""
    timer = start_timer()
    report = StoreReport(root=str(ctx.store.root), status="healthy", version=_version())

    try:
        report.categories = ctx.store.category_order()
        refs = ctx.store.list_topics()
    except StoreUnavailableError as exc:
        report.status = "unavailable"
        return OperationResult.ok(report, warnings=[exc.message], elapsed_ms=timer.elapsed_ms)
    except BlueprintError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)

    report.topics = len(refs)
    for ref in refs:
        try:
            doc = ctx.store.load_ref(ref)
        except StorageError as exc:
            report.issues.append(StoreIssue(ref.key, "unreadable", exc.message))
            continue

        if not doc.drafts:
            report.issues.append(StoreIssue(doc.key, "empty", "document has no content"))
            continue
        if doc.has_multiple_drafts:
            kinds = ", ".join(d.kind.value for d in doc.drafts)
            report.issues.append(StoreIssue(
                doc.key,
                "multiple_drafts",
                f"{len(doc.drafts)} drafts stored ({kinds})",
            ))
        if not doc.filled_drafts:
            report.issues.append(StoreIssue(doc.key, "stub_only", "every draft contains TODO markers"))
        for draft in doc.filled_drafts:
            missing = draft.missing_sections()
            if missing:
                report.issues.append(StoreIssue(
                    doc.key,
                    "missing_sections",
                    f"draft {draft.index} lacks: {', '.join(missing)}",
                ))

    if report.issues:
        report.status = "degraded"

    logger.info("store_scanned", root=report.root, topics=report.topics, issues=len(report.issues))
    return OperationResult.ok(report, elapsed_ms=timer.elapsed_ms)
