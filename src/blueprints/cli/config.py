"""
CLI: ``blueprints config`` — configuration inspection.
"""

from __future__ import annotations

import json

import typer
from pydantic import ValidationError as SettingsValidationError
from rich.markup import escape

from blueprints.cli.utils import console, err_console

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config(
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json, env"),
) -> None:
    """Show current configuration."""
    from blueprints.core.settings import get_settings

    try:
        settings = get_settings()
    except SettingsValidationError as e:
        err_console.print(f"[red]Configuration Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    if format == "json":
        console.print_json(settings.model_dump_json())
        return

    if format == "env":
        for key, value in sorted(settings.model_dump(mode="json").items()):
            if value is None:
                value = ""
            elif isinstance(value, (list, dict)):
                value = json.dumps(value)
            typer.echo(f"BLUEPRINTS_{key.upper()}={value}")
        return

    from rich.table import Table

    console.print(f"[bold]Store Root:[/bold] {settings.resolved_root()}", highlight=False)
    table = Table()
    table.add_column("Setting")
    table.add_column("Value")
    for key, value in sorted(settings.model_dump(mode="json").items()):
        table.add_row(key, escape(str(value)))
    console.print(table)


@app.command("validate")
def validate_config() -> None:
    """Validate configuration and check the store root exists."""
    from blueprints.core.settings import get_settings

    try:
        settings = get_settings(_force_reload=True)
    except SettingsValidationError as e:
        err_console.print(f"[red]Configuration Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    root = settings.resolved_root()
    if not root.is_dir():
        err_console.print(f"[red]Store root not found:[/red] {root}", highlight=False)
        raise typer.Exit(1)

    console.print(f"[green]✓ Configuration valid[/green] (root: {root})", highlight=False)
