"""
CLI utility helpers — output formatting and context construction.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError as SettingsValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from blueprints.core.settings import BlueprintSettings, get_settings
from blueprints.ops.context import OperationContext
from blueprints.ops.result import OperationResult, PagedResult

console = Console()
err_console = Console(stderr=True)


# ── Context helper ───────────────────────────────────────────────────────


def load_settings(root: Path | None = None) -> BlueprintSettings:
    """Cached settings, with ``--root`` applied on a copy when given."""
    try:
        settings = get_settings()
    except SettingsValidationError as e:
        err_console.print(f"[bold red]Configuration Error[/bold red]: {escape(str(e))}")
        raise typer.Exit(code=1) from e
    if root is not None:
        settings = settings.model_copy(update={"root": root})
    return settings


def make_context(root: Path | None = None, *, dry_run: bool = False) -> OperationContext:
    """Create an ``OperationContext`` for CLI commands."""
    return OperationContext.from_settings(load_settings(root), caller="cli", dry_run=dry_run)


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / pydantic model / dict to plain dict."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def fail_if_error(result: OperationResult) -> None:
    """Print the error of a failed result and exit 1."""
    if result.success:
        return
    err = result.error
    msg = err.message if err else "Unknown error"
    code = err.code if err else "ERROR"
    err_console.print(f"[bold red]Error[/bold red] ({code}): {escape(msg)}", highlight=False)
    candidates = err.details.get("candidates") if err else None
    if candidates:
        err_console.print("  Did you mean: " + ", ".join(candidates), markup=False)
    raise typer.Exit(code=1)


def print_warnings(result: OperationResult) -> None:
    for w in result.warnings:
        err_console.print(f"[yellow]Warning:[/yellow] {escape(w)}", highlight=False)


def emit_text(text: str) -> None:
    """Write document text to stdout untouched (no Rich markup, no wrapping)."""
    typer.echo(text, nl=not text.endswith("\n"))


def output_result(
    result: OperationResult,
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render an ``OperationResult`` to the terminal."""
    fail_if_error(result)

    data = result.data

    if as_json:
        payload = _to_dict(data) if not isinstance(data, list | tuple) else [_to_dict(d) for d in data]
        console.print_json(json.dumps(payload, default=str))
        return

    if isinstance(data, list):
        if not data:
            console.print("[dim]No items.[/dim]")
            return
        _print_table(data, title=title)
    else:
        _print_dict(_to_dict(data), title=title)


def output_paged(
    result: PagedResult,
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render a ``PagedResult`` to the terminal with pagination info."""
    fail_if_error(result)

    items = result.data or []

    if as_json:
        payload = {
            "items": [_to_dict(d) for d in items],
            "total": result.total,
            "limit": result.limit,
            "offset": result.offset,
            "has_more": result.has_more,
        }
        console.print_json(json.dumps(payload, default=str))
        return

    print_warnings(result)

    if not items:
        console.print("[dim]No items.[/dim]")
        return

    _print_table(items, title=title)

    if result.has_more:
        console.print(
            f"\n[dim]Showing {len(items)} of {result.total}"
            f" (offset {result.offset})[/dim]"
        )


# ── Private helpers ──────────────────────────────────────────────────────


def _print_table(items: list, *, title: str = "") -> None:
    """Render a list of dataclasses/dicts as a Rich table."""
    first = _to_dict(items[0])
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in first:
        table.add_column(col, overflow="fold")
    for item in items:
        d = _to_dict(item)
        table.add_row(*(escape(str(v)) for v in d.values()))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: ", end="")
        console.print(str(v), markup=False, highlight=False)
