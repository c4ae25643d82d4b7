"""Structured logging configuration.

The cleaner builds its logger explicitly and hands it to the components that
need it, instead of configuring structlog globally. Each event is rendered
as one line on stdout: a JSON object by default, or structlog's console
rendering for interactive use.
"""

import logging
import sys
from typing import Any, Dict, Optional, TextIO

import structlog

LOG_LEVELS: Dict[str, int] = {
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def add_logger_name(name: str) -> structlog.types.Processor:
    """Build a processor that stamps every event with a fixed logger name."""

    def processor(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        event_dict.setdefault("logger", name)
        return event_dict

    return processor


def create_logger(
    log_level: str = "INFO",
    log_format: str = "json",
    stream: Optional[TextIO] = None,
    name: str = "epgstation_cleaner",
) -> structlog.types.FilteringBoundLogger:
    """
    Create a structured logger

    Args:
        log_level: Minimum level (ERROR, WARN, INFO, DEBUG)
        log_format: Output format ("json" or "console")
        stream: Output stream, defaults to the current sys.stdout
        name: Value of the ``logger`` field on every event

    Returns:
        Bound logger that drops events below ``log_level``
    """
    numeric_level = LOG_LEVELS.get(log_level.upper(), logging.INFO)

    shared_processors = [
        structlog.processors.add_log_level,
        add_logger_name(name),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        processors = shared_processors + [structlog.processors.JSONRenderer()]
    else:
        # Console format for development
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=False)]

    return structlog.wrap_logger(
        structlog.PrintLogger(stream if stream is not None else sys.stdout),
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get the module-level fallback logger

    Components use it when no logger was passed to them explicitly.

    Args:
        name: Logger name (typically __name__)

    Returns:
        structlog logger proxy
    """
    return structlog.get_logger(name)
