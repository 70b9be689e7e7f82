"""
Blueprint Logging - structured logging for the CLI and MCP server.

This module configures structlog once per process and hands out bound
loggers to the store, the ops layer and the transports.

Manifesto:
    Document text goes to stdout, so it can be piped straight into an
    assistant's context. Everything else goes to stderr as structured events:

    - **Separates:** Log lines never mix with emitted Markdown
    - **Structures:** JSON output when not attached to a terminal
    - **Correlates:** request_id and topic keys bound per operation

Architecture:
    ::

        configure_logging(level="INFO", json_format=None, service="blueprints")
            │
            ▼
        structlog processor chain:
          1. merge_contextvars
          2. TimeStamper(iso)
          3. add_log_level
          4. add_logger_name
          5. add_service_metadata
          6. JSONRenderer (or ConsoleRenderer on a tty)

Examples:
    >>> from blueprints.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", service="blueprints")
    >>> logger = get_logger(__name__)
    >>> logger.debug("topic_read", topic="react", size_bytes=4096)

Tags:
    logging, structlog, observability, json-logging, blueprints

Doc-Types:
    - API Reference
    - Observability Guide
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Store service name for metadata
_SERVICE_NAME = "blueprints"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service", _SERVICE_NAME)
    return event_dict


class _NamedPrintLogger(structlog.PrintLogger):
    """PrintLogger that remembers the name it was requested under."""

    def __init__(self, file: Any, name: str | None = None) -> None:
        super().__init__(file=file)
        self.name = name


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    """Bind to whatever ``sys.stderr`` is at call time (test runners swap it)."""
    return _NamedPrintLogger(sys.stderr, args[0] if args else None)


def _add_logger_name(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add the requested logger name, when there is one."""
    name = getattr(logger, "name", None)
    if name:
        event_dict.setdefault("logger", name)
    return event_dict


def configure_logging(
    level: str = "WARNING",
    json_format: bool | None = None,
    service: str = "blueprints",
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs

    Example:
        # MCP server over stdio (stdout belongs to the protocol)
        configure_logging(level="INFO", json_format=True, service="blueprints-mcp")

        # Interactive CLI
        configure_logging(level="DEBUG")
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    if json_format is None:
        json_format = not sys.stderr.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        _add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )

    # Standard library loggers (mcp, uvicorn) follow the same level
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper()),
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        structlog BoundLogger; events carry *name* under ``logger``
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs.

    Example:
        bind_context(request_id="abc123", caller="cli")
        logger.info("topic_read")  # Includes request_id and caller
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(request_id="abc123", topic="react"):
            logger.info("topic_read")
        # Context cleared here
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    def __exit__(self, *args) -> None:
        unbind_context(*self._context.keys())

    async def __aenter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    async def __aexit__(self, *args) -> None:
        unbind_context(*self._context.keys())


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]
