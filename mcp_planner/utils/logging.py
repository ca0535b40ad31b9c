"""Structured logging setup with structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog


def setup_logging(level: str = "INFO", json_logs: bool = False, stream: TextIO | None = None) -> None:
    """
    Configure structlog for the server.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        json_logs: If True, output JSON; otherwise console-friendly.
        stream: Where log lines go. The stdio transport owns stdout, so the
            server passes sys.stderr here.

    Example:
        >>> setup_logging(level="DEBUG", stream=sys.stderr)
    """
    stream = stream or sys.stderr
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=log_level,
    )
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_logs:
        shared_processors.append(structlog.processors.format_exc_info)
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(structlog.dev.ConsoleRenderer(colors=False))
    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a bound logger for the given module name."""
    return structlog.get_logger(name)
