"""structlog configuration for the record tools server.

The HTTP transport logs to stdout, as console lines in development and JSON
in production. The stdio transport owns stdout for protocol frames, so it
logs JSON to stderr instead.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.types import EventDict, Processor, WrappedLogger


def _stamp(fields: dict[str, Any]) -> Processor:
    """Build a processor adding fixed fields to every event."""
    def processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def setup_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
    **server_fields: Any
) -> None:
    """
    Configure structlog for one server process.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Emit one JSON object per line instead of console output
        stream: Where log lines go; defaults to stdout
        **server_fields: Fields stamped on every line, e.g. server name and transport
    """
    stream = stream or sys.stdout
    level = getattr(logging, log_level.upper())

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if server_fields:
        processors.append(_stamp(server_fields))

    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    # uvicorn logs through the standard library
    logging.basicConfig(format="%(message)s", stream=stream, level=level)


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """Get a structlog logger, optionally bound to initial context."""
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
