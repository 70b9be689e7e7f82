"""
Root Typer application for the blueprints CLI.

Sub-command modules import the ops layer lazily inside each command, so
``blueprints --help`` stays fast.
"""

from __future__ import annotations

import typer
from typer import Typer

app = Typer(
    name="blueprints",
    help="blueprints — best-practice reference documents for AI coding assistants.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from blueprints import __version__

        typer.echo(f"blueprints {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug events to stderr."),
) -> None:
    """blueprints CLI — list, read and concatenate topic documents."""
    from pydantic import ValidationError as SettingsValidationError

    from blueprints.core.logging import configure_logging
    from blueprints.core.settings import get_settings

    try:
        settings = get_settings()
        level, json_format = settings.log_level, settings.log_format == "json"
    except SettingsValidationError:
        # Reported by the command itself
        level, json_format = "WARNING", False

    configure_logging(
        level="DEBUG" if verbose else level,
        json_format=json_format,
        service="blueprints",
    )


# ── Sub-command registration ─────────────────────────────────────────────

from blueprints.cli.config import app as config_app  # noqa: E402
from blueprints.cli.health import app as health_app  # noqa: E402
from blueprints.cli.topics import app as topics_app  # noqa: E402

app.add_typer(topics_app, name="topics", help="Topic documents: list, show, select, describe.")
app.add_typer(health_app, name="health", help="Store health and version.")
app.add_typer(config_app, name="config", help="Configuration inspection.")
