"""
Topic operations.

Listing, retrieval, multi-topic selection, structural description,
single-section extraction and stub scaffolding. Every function takes an
:class:`OperationContext`, never raises for expected failures, and returns
an :class:`OperationResult` the CLI and MCP server render directly.
"""

from __future__ import annotations

from blueprints.core.errors import (
    BlueprintError,
    DocumentExistsError,
    SectionNotFoundError,
    StorageError,
    ValidationError,
)
from blueprints.core.logging import LogContext, get_logger
from blueprints.core.models import Draft, DraftPolicy, TopicDocument
from blueprints.core.selector import DocumentSelector
from blueprints.core.template import default_title, render_stub
from blueprints.ops.context import OperationContext
from blueprints.ops.requests import (
    GetSectionRequest,
    GetTopicRequest,
    ListTopicsRequest,
    NewTopicRequest,
    SelectTopicsRequest,
)
from blueprints.ops.responses import (
    CategorySummary,
    DraftDetail,
    NewTopicResult,
    SectionText,
    Selection,
    TopicDetail,
    TopicSummary,
    TopicText,
)
from blueprints.ops.result import OperationResult, PagedResult, start_timer

logger = get_logger(__name__)


def _internal(exc: Exception, what: str, elapsed_ms: float) -> OperationResult:
    logger.exception("op_failed", error=str(exc))
    return OperationResult.fail("INTERNAL", f"Failed to {what}: {exc}", elapsed_ms=elapsed_ms)


# ------------------------------------------------------------------ #
# Listing
# ------------------------------------------------------------------ #


def list_topics(
    ctx: OperationContext,
    request: ListTopicsRequest,
) -> PagedResult[TopicSummary]:
    """List stored topics with draft counts, optionally within one category."""
    timer = start_timer()

    try:
        if request.offset < 0:
            raise ValidationError("offset must be >= 0", field="offset", value=request.offset)
        if request.limit < 1:
            raise ValidationError("limit must be >= 1", field="limit", value=request.limit)

        refs = ctx.store.list_topics(request.category)
        page = refs[request.offset : request.offset + request.limit]

        summaries = []
        warnings = []
        for ref in page:
            try:
                doc = ctx.store.load_ref(ref)
            except StorageError as exc:
                warnings.append(f"{ref.key}: {exc.message}")
                continue
            summaries.append(_summarize(doc))

        return PagedResult.from_items(
            summaries,
            total=len(refs),
            limit=request.limit,
            offset=request.offset,
            warnings=warnings,
            elapsed_ms=timer.elapsed_ms,
        )
    except BlueprintError as exc:
        return PagedResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", error=str(exc))
        return PagedResult.fail(
            "INTERNAL", f"Failed to list topics: {exc}", elapsed_ms=timer.elapsed_ms
        )


def list_categories(ctx: OperationContext) -> OperationResult[list[CategorySummary]]:
    """List configured and on-disk categories with their topic counts."""
    timer = start_timer()

    try:
        summaries = []
        for name, present in ctx.store.list_categories():
            count = len(ctx.store.list_topics(name)) if present else 0
            summaries.append(CategorySummary(name=name, topics=count, present=present))
        return OperationResult.ok(summaries, elapsed_ms=timer.elapsed_ms)
    except BlueprintError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        return _internal(exc, "list categories", timer.elapsed_ms)


# ------------------------------------------------------------------ #
# Retrieval
# ------------------------------------------------------------------ #


def get_topic(
    ctx: OperationContext,
    request: GetTopicRequest,
) -> OperationResult[TopicText]:
    """Return one topic's text. The default ``all`` policy is byte-identical to the file."""
    timer = start_timer()

    with LogContext(request_id=ctx.request_id, caller=ctx.caller):
        try:
            policy = DraftPolicy(request.policy or ctx.default_policy)
            selector = DocumentSelector(ctx.store)
            ref = ctx.store.resolve(request.topic)
            text = selector.render(ref, policy)
            return OperationResult.ok(
                TopicText(
                    key=ref.key,
                    policy=policy.value,
                    text=text,
                    size_bytes=len(text.encode("utf-8")),
                ),
                elapsed_ms=timer.elapsed_ms,
            )
        except BlueprintError as exc:
            return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
        except Exception as exc:
            return _internal(exc, "get topic", timer.elapsed_ms)


def select_topics(
    ctx: OperationContext,
    request: SelectTopicsRequest,
) -> OperationResult[Selection]:
    """Concatenate several topics in request order. Any bad key fails the whole call."""
    timer = start_timer()

    if not request.topics:
        return OperationResult.fail(
            "VALIDATION_FAILED",
            "At least one topic is required",
            details={"field": "topics"},
            elapsed_ms=timer.elapsed_ms,
        )

    with LogContext(request_id=ctx.request_id, caller=ctx.caller):
        try:
            policy = DraftPolicy(request.policy or ctx.default_policy)
            bundle = DocumentSelector(ctx.store).select(
                list(request.topics),
                policy,
                with_sources=request.with_sources,
            )
            return OperationResult.ok(
                Selection(
                    keys=bundle.keys,
                    policy=policy.value,
                    text=bundle.text,
                    size_bytes=bundle.size_bytes,
                ),
                elapsed_ms=timer.elapsed_ms,
            )
        except BlueprintError as exc:
            return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
        except Exception as exc:
            return _internal(exc, "select topics", timer.elapsed_ms)


# ------------------------------------------------------------------ #
# Structure
# ------------------------------------------------------------------ #


def describe_topic(ctx: OperationContext, topic: str) -> OperationResult[TopicDetail]:
    """Describe the drafts stored for a topic: kind, metadata, sections, changelog."""
    timer = start_timer()

    try:
        doc = ctx.store.load(topic)
        detail = TopicDetail(
            key=doc.key,
            path=str(doc.ref.path),
            size_bytes=doc.size_bytes,
            drafts=[_draft_detail(d) for d in doc.drafts],
        )
        warnings = []
        if doc.has_multiple_drafts:
            warnings.append(
                f"{doc.key} stores {len(doc.drafts)} drafts; no reconciliation is applied"
            )
        return OperationResult.ok(detail, warnings=warnings, elapsed_ms=timer.elapsed_ms)
    except BlueprintError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        return _internal(exc, "describe topic", timer.elapsed_ms)


def get_section(
    ctx: OperationContext,
    request: GetSectionRequest,
) -> OperationResult[SectionText]:
    """Return one ``##`` section of a topic.

    Without an explicit draft index the last filled draft is used, or the
    last draft when every draft is a stub.
    """
    timer = start_timer()

    try:
        doc = ctx.store.load(request.topic)
        draft = _pick_draft(doc, request.draft)
        section = draft.find_section(request.section)
        if section is None:
            raise SectionNotFoundError(
                f"Section {request.section!r} not found in {doc.key} (draft {draft.index})"
            ).with_context(topic=doc.key, available=draft.section_titles)
        return OperationResult.ok(
            SectionText(key=doc.key, draft=draft.index, section=section.title, text=section.text),
            elapsed_ms=timer.elapsed_ms,
        )
    except BlueprintError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        return _internal(exc, "get section", timer.elapsed_ms)


# ------------------------------------------------------------------ #
# Authoring
# ------------------------------------------------------------------ #


def new_topic(
    ctx: OperationContext,
    request: NewTopicRequest,
) -> OperationResult[NewTopicResult]:
    """Scaffold a stub document at ``<category>/<topic>.md``. Never overwrites."""
    timer = start_timer()

    try:
        path = ctx.store.path_for(request.category, request.topic)
        ctx.store.ensure_available()
        key = f"{path.parent.name}/{path.stem}"

        if path.exists():
            raise DocumentExistsError(
                f"{key} already exists"
            ).with_context(topic=key, path=str(path))

        if ctx.dry_run:
            return OperationResult.ok(
                NewTopicResult(key=key, path=str(path), created=False, dry_run=True),
                elapsed_ms=timer.elapsed_ms,
            )

        title = request.title or default_title(path.stem)
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with path.open("x", encoding="utf-8") as fh:
                fh.write(render_stub(title))
        except FileExistsError as exc:
            raise DocumentExistsError(f"{key} already exists", cause=exc) from exc
        except OSError as exc:
            raise StorageError(f"Could not write {key}: {exc}", cause=exc) from exc

        logger.info("topic_scaffolded", topic=key, path=str(path))
        return OperationResult.ok(
            NewTopicResult(key=key, path=str(path), created=True),
            elapsed_ms=timer.elapsed_ms,
        )
    except BlueprintError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        return _internal(exc, "create topic", timer.elapsed_ms)


# ------------------------------------------------------------------ #
# Private helpers
# ------------------------------------------------------------------ #


def _summarize(doc: TopicDocument) -> TopicSummary:
    return TopicSummary(
        key=doc.key,
        category=doc.ref.category,
        topic=doc.ref.topic,
        drafts=len(doc.drafts),
        stub_drafts=len(doc.stub_drafts),
        size_bytes=doc.size_bytes,
    )


def _draft_detail(draft: Draft) -> DraftDetail:
    return DraftDetail(
        index=draft.index,
        kind=draft.kind.value,
        title=draft.title,
        last_updated=draft.metadata.last_updated,
        versions=draft.metadata.versions,
        sections=draft.section_titles,
        missing_sections=draft.missing_sections(),
        changelog=[
            {"version": e.version, "date": e.date, "changes": e.changes}
            for e in draft.changelog
        ],
    )


def _pick_draft(doc: TopicDocument, index: int | None) -> Draft:
    if not doc.drafts:
        raise SectionNotFoundError(f"{doc.key} is empty").with_context(topic=doc.key)
    if index is None:
        filled = doc.filled_drafts
        return filled[-1] if filled else doc.drafts[-1]
    if not 0 <= index < len(doc.drafts):
        raise ValidationError(
            f"{doc.key} has {len(doc.drafts)} draft(s); index {index} is out of range",
            field="draft",
            value=index,
        )
    return doc.drafts[index]
