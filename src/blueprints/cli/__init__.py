"""
CLI layer for blueprints.

Provides a Typer application with sub-commands that delegate to the
operations layer (``blueprints.ops``). All lookup logic lives in ops and
core; this package handles only terminal transport: argument parsing,
coloured output, and table formatting. Document text is written to stdout
unchanged so it can be piped.

Entry point::

    blueprints --help
"""

from blueprints.cli.app import app

__all__ = ["app"]
