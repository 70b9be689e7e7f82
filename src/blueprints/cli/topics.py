"""
CLI: ``blueprints topics`` — list, read, select and scaffold topic documents.
"""

from __future__ import annotations

from pathlib import Path

import typer

from blueprints.cli.utils import (
    console,
    emit_text,
    fail_if_error,
    make_context,
    output_paged,
    output_result,
    print_warnings,
)
from blueprints.core.models import DraftPolicy

app = typer.Typer(no_args_is_help=True)

ROOT_OPTION = typer.Option(None, "--root", "-r", help="Store root (default: bundled library)")
POLICY_OPTION = typer.Option(
    None, "--policy", "-p", help="Which drafts to emit (default: BLUEPRINTS_DEFAULT_POLICY, else all)"
)


@app.command("list")
def list_topics(
    category: str | None = typer.Option(None, "--category", "-c"),
    limit: int = typer.Option(100, "--limit", "-n", min=1),
    offset: int = typer.Option(0, "--offset", min=0),
    root: Path | None = ROOT_OPTION,
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List topic documents."""
    from blueprints.ops.requests import ListTopicsRequest
    from blueprints.ops.topics import list_topics as _list

    ctx = make_context(root)
    result = _list(ctx, ListTopicsRequest(category=category, limit=limit, offset=offset))
    output_paged(result, as_json=json_out, title="Topics")


@app.command("categories")
def list_categories(
    root: Path | None = ROOT_OPTION,
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List categories and how many topics each holds."""
    from blueprints.ops.topics import list_categories as _list

    ctx = make_context(root)
    output_result(_list(ctx), as_json=json_out, title="Categories")


@app.command("show")
def show_topic(
    topic: str = typer.Argument(..., help="Topic key, e.g. 'react' or 'stack/react'"),
    policy: DraftPolicy | None = POLICY_OPTION,
    root: Path | None = ROOT_OPTION,
) -> None:
    """Print a topic document to stdout."""
    from blueprints.ops.requests import GetTopicRequest
    from blueprints.ops.topics import get_topic

    ctx = make_context(root)
    result = get_topic(ctx, GetTopicRequest(topic=topic, policy=policy))
    fail_if_error(result)
    emit_text(result.data.text)


@app.command("select")
def select_topics(
    topics: list[str] = typer.Argument(..., help="Topic keys, in output order"),
    policy: DraftPolicy | None = POLICY_OPTION,
    sources: bool = typer.Option(False, "--sources", "-s", help="Prefix each document with its source file"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to a file instead of stdout"),
    root: Path | None = ROOT_OPTION,
) -> None:
    """Concatenate several topic documents for an assistant's context."""
    from blueprints.ops.requests import SelectTopicsRequest
    from blueprints.ops.topics import select_topics as _select

    ctx = make_context(root)
    request = SelectTopicsRequest(topics=tuple(topics), policy=policy, with_sources=sources)
    result = _select(ctx, request)
    fail_if_error(result)

    selection = result.data
    if output is None:
        emit_text(selection.text)
        return

    output.write_text(selection.text, encoding="utf-8")
    console.print(
        f"[green]✓[/green] Wrote {len(selection.keys)} topic(s), "
        f"{selection.size_bytes} bytes to {output}",
        highlight=False,
    )


@app.command("describe")
def describe_topic(
    topic: str = typer.Argument(..., help="Topic key"),
    root: Path | None = ROOT_OPTION,
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show the drafts, sections and changelog of a topic."""
    from blueprints.ops.topics import describe_topic as _describe

    ctx = make_context(root)
    result = _describe(ctx, topic)
    if json_out:
        output_result(result, as_json=True)
        return

    fail_if_error(result)
    print_warnings(result)
    detail = result.data
    console.print(f"[bold]{detail.key}[/bold]  ({detail.size_bytes} bytes)", highlight=False)
    for draft in detail.drafts:
        colour = "yellow" if draft.kind == "stub" else "green"
        console.print(
            f"\n  Draft {draft.index} [{colour}]{draft.kind}[/{colour}]",
            highlight=False,
        )
        console.print(f"    title: {draft.title or '-'}", markup=False, highlight=False)
        console.print(f"    last updated: {draft.last_updated or '-'}", markup=False, highlight=False)
        console.print(f"    versions: {draft.versions or '-'}", markup=False, highlight=False)
        console.print(f"    sections: {', '.join(draft.sections) or '-'}", markup=False, highlight=False)
        if draft.missing_sections:
            console.print(
                f"    missing: {', '.join(draft.missing_sections)}", markup=False, highlight=False
            )
        if draft.changelog:
            console.print(f"    changelog: {len(draft.changelog)} row(s), first {draft.changelog[0]['version']}",
                          markup=False, highlight=False)


@app.command("section")
def show_section(
    topic: str = typer.Argument(..., help="Topic key"),
    section: str = typer.Argument(..., help="Section title, e.g. 'Quick Reference'"),
    draft: int | None = typer.Option(None, "--draft", "-d", help="Zero-based draft index"),
    root: Path | None = ROOT_OPTION,
) -> None:
    """Print one section of a topic document."""
    from blueprints.ops.requests import GetSectionRequest
    from blueprints.ops.topics import get_section

    ctx = make_context(root)
    result = get_section(ctx, GetSectionRequest(topic=topic, section=section, draft=draft))
    fail_if_error(result)
    emit_text(result.data.text)


@app.command("new")
def new_topic(
    category: str = typer.Argument(..., help="Category directory, e.g. 'stack'"),
    topic: str = typer.Argument(..., help="Topic name, e.g. 'vue'"),
    title: str | None = typer.Option(None, "--title", "-t", help="Display title (default: from topic)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be created"),
    root: Path | None = ROOT_OPTION,
) -> None:
    """Scaffold a stub document from the canonical template."""
    from blueprints.ops.requests import NewTopicRequest
    from blueprints.ops.topics import new_topic as _new

    ctx = make_context(root, dry_run=dry_run)
    result = _new(ctx, NewTopicRequest(category=category, topic=topic, title=title))
    fail_if_error(result)

    created = result.data
    if created.dry_run:
        console.print(f"[dim]Would create[/dim] {created.path}", highlight=False)
    else:
        console.print(f"[green]✓[/green] Created {created.key} at {created.path}", highlight=False)
