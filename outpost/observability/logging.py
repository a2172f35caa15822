"""Structured logging configuration using structlog.

Provides human-readable console logging for development and JSON logging
for production, with automatic context binding and trace correlation.
"""

import sys
from typing import Any, cast

import structlog
from opentelemetry import trace
from structlog.types import EventDict, WrappedLogger

LEVELS: dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}


def add_trace_context(
    _logger: WrappedLogger,
    _method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add trace_id and span_id of the current OpenTelemetry span.

    Values already bound on the event (e.g. from request headers) win.
    """
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict.setdefault("trace_id", format(span_context.trace_id, "032x"))
        event_dict.setdefault("span_id", format(span_context.span_id, "016x"))
    return event_dict


def setup_logging(
    level: str = "INFO",
    format: str = "console",
    include_trace_id: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        format: Output format - "console" for development, "json" for production
        include_trace_id: Whether to include the active trace and span ids
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if include_trace_id:
        processors.append(add_trace_context)

    if format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LEVELS.get(level.upper(), 20)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        A bound structlog logger
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
