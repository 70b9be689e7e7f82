"""
Blueprints - best-practice reference documents for AI coding assistants.

Markdown "dev blueprints" (Playwright, Prisma, React, Tailwind,
TypeScript) plus the small machinery that looks them up by topic and
concatenates them for pasting into an assistant's context window:

- blueprints.core: store, parser, selector, settings, errors, logging
- blueprints.ops: transport-agnostic operations returning OperationResult
- blueprints.cli: ``blueprints`` Typer CLI
- blueprints.mcp: ``blueprints-mcp`` Model Context Protocol server
"""

__version__ = "0.1.0"

from blueprints.core import *  # noqa
