from __future__ import annotations

from typing import Any, Mapping
from uuid import uuid4
import logging
import sys
import structlog

TRACE_HEADER = "X-Trace-Id"


def setup_logging(level: int | str = "INFO", *, json: bool = True) -> None:
    """Configure structlog.

    The HTTP service logs JSON lines; the setup CLI passes ``json=False`` for
    human-readable console output on stderr.
    """
    stream = sys.stdout if json else sys.stderr
    logging.basicConfig(format="%(message)s", level=level, stream=stream)

    min_level = level
    if isinstance(level, str):
        min_level = logging.getLevelName(level.upper())
        if not isinstance(min_level, int):
            min_level = logging.INFO

    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer(colors=False)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None):
    return structlog.get_logger(name or "gammonbrain")


def trace_id_from(headers: Mapping[str, str]) -> str:
    """Reuse the caller's trace id or mint a fresh one."""
    return headers.get(TRACE_HEADER) or uuid4().hex


def bind_trace(logger: Any, trace_id: str | None = None, **kwargs) -> Any:
    """Attach trace metadata to a logger for request correlation."""
    context = {"trace_id": trace_id} if trace_id else {}
    context.update(kwargs)
    return logger.bind(**context)


__all__ = ["TRACE_HEADER", "bind_trace", "get_logger", "setup_logging", "trace_id_from"]
