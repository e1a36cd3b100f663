"""Structured logging for twmarket.

Every report fetch runs inside a trace scope, so all log lines of one
fetch (and of the constituent fetches of a composite report) carry the
same ``trace_id``.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator

import structlog
from structlog.typing import FilteringBoundLogger, Processor

_trace_id_var: ContextVar[str | None] = ContextVar("twmarket_trace_id", default=None)


def get_trace_id() -> str | None:
    """Return the trace id of the enclosing scope, if any."""
    return _trace_id_var.get()


@contextmanager
def trace_scope() -> Iterator[str]:
    """Reuse the enclosing trace id, or open a new one for this block."""
    current = _trace_id_var.get()
    if current is not None:
        yield current
        return

    token = _trace_id_var.set(uuid.uuid4().hex[:16])
    try:
        yield _trace_id_var.get()
    finally:
        _trace_id_var.reset(token)


def add_trace_id(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Processor stamping the current trace id on each event."""
    trace_id = get_trace_id()
    if trace_id is not None:
        event_dict.setdefault("trace_id", trace_id)
    return event_dict


def get_logger(name: str) -> FilteringBoundLogger:
    return structlog.get_logger(name)


_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    if log_format == "console":
        return structlog.dev.ConsoleRenderer()
    raise ValueError(f"Invalid log_format '{log_format}'. Must be 'json' or 'console'")


def configure_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Route structlog through stdlib logging on stderr.

    stdout is left to the CLI, which prints records there.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL (any case)
        log_format: ``json`` (one object per line, CJK kept as-is) or ``console``

    Raises:
        ValueError: On an unknown level or format
    """
    level_name = log_level.upper()
    if level_name not in _LEVELS:
        raise ValueError(f"Invalid log_level '{log_level}'. Must be one of: {', '.join(_LEVELS)}")
    level = getattr(logging, level_name)
    renderer = _renderer(log_format)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_trace_id,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if log_format == "json":
        processors.append(structlog.processors.format_exc_info)
    processors.append(renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
