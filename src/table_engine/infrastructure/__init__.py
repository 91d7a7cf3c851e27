"""Infrastructure layer - cross-cutting concerns."""

from table_engine.infrastructure.config import Config, get_config
from table_engine.infrastructure.logging import get_logger, setup_logging
from table_engine.infrastructure.metrics import MetricsRegistry, get_metrics
from table_engine.infrastructure.tracing import get_tracer, query_span, setup_tracing

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "get_logger",
    "MetricsRegistry",
    "get_metrics",
    "setup_tracing",
    "get_tracer",
    "query_span",
]
