"""Structured logging configuration.

The domain layer logs through plain ``logging.getLogger(__name__)`` while
the application layer uses structlog. Both end up on one handler attached
to the ``table_engine`` logger, rendered by the same structlog chain, so a
warning from ``Table.insert`` and an ``operation_failed`` event from
``TableEngine`` look alike. The root logger is left to the host program.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.types import Processor

from table_engine.infrastructure.config import ObservabilityConfig

PACKAGE_LOGGER = "table_engine"


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(
    observability: ObservabilityConfig | None = None,
    stream: TextIO | None = None,
) -> None:
    """
    Route package logs through structlog.

    Calling it again replaces the previous handler, so the level and
    format can be changed at runtime.

    Args:
        observability: Level and format to use; defaults to WARNING, console
        stream: Destination, stderr unless given. Rendered tables go to
            stdout and must not interleave with logs.
    """
    observability = observability or ObservabilityConfig()
    level = logging.getLevelName(observability.log_level)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(observability.log_format),
            ],
        )
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for old in list(package_logger.handlers):
        package_logger.removeHandler(old)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """
    Get a bound logger instance.

    Args:
        name: Logger name; pass ``__name__`` so it falls under ``table_engine``
        **initial_context: Initial context to bind to the logger

    Returns:
        A bound structlog logger
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
