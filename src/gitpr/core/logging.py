"""Structured logging configuration using structlog.

Logs go to stderr: stdout is reserved for tables and raw diffs so they can be
piped into other tools.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import Any

import structlog
from pydantic import BaseModel


def setup_logging(level: str = "WARNING") -> None:
    """Configure structlog with pretty output for debug runs, JSON otherwise."""

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    is_debug = level.upper() == "DEBUG"

    if is_debug:
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())

    # Silence noisy third-party loggers
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a bound logger for a module."""
    return structlog.get_logger(name)


# ── Request tracing ──────────────────────────────────────────────────────────


class RequestTrace(BaseModel):
    """One GitHub API round trip, as seen by the client."""

    method: str
    url: str
    status_code: int | None = None
    payload: dict[str, Any] | None = None
    error: str | None = None


TraceSink = Callable[[RequestTrace], None]


def structlog_trace_sink(logger: structlog.stdlib.BoundLogger | None = None) -> TraceSink:
    """Build a sink that writes every trace event to the debug log."""
    log = logger or get_logger("gitpr.trace")

    def _sink(event: RequestTrace) -> None:
        log.debug("github_request", **event.model_dump(exclude_none=True))

    return _sink
