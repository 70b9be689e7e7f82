"""
CLI: ``blueprints health`` — store health check.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from blueprints.cli.utils import console, fail_if_error, make_context, output_result, print_warnings

app = typer.Typer(no_args_is_help=True)


@app.command("check")
def health_check(
    root: Path | None = typer.Option(None, "--root", "-r"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Scan every document and report drafts, stubs and missing sections."""
    from blueprints.ops.health import check_store

    ctx = make_context(root)
    result = check_store(ctx)
    fail_if_error(result)
    report = result.data

    if json_out:
        console.print_json(data=report.to_dict())
    else:
        print_warnings(result)
        colour = {"healthy": "green", "degraded": "yellow"}.get(report.status, "red")
        console.print(f"[bold]Status:[/bold] [{colour}]{report.status}[/{colour}]")
        console.print(f"[bold]Root:[/bold] {report.root}", highlight=False)
        console.print(f"[bold]Topics:[/bold] {report.topics}")
        console.print(f"[bold]Categories:[/bold] {', '.join(report.categories) or '-'}")
        if report.issues:
            table = Table(title="Issues")
            table.add_column("Topic")
            table.add_column("Kind")
            table.add_column("Detail", overflow="fold")
            for issue in report.issues:
                table.add_row(issue.key, issue.kind, issue.message)
            console.print(table)

    if report.status == "unavailable":
        raise typer.Exit(code=1)


@app.command("version")
def version(json_out: bool = typer.Option(False, "--json")) -> None:
    """Show package version."""
    from blueprints import __version__
    from blueprints.ops.result import OperationResult

    output_result(OperationResult.ok({"version": __version__}), as_json=json_out, title="Version")
