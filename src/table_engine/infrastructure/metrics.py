"""Prometheus metrics for the table engine."""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
)


class MetricsRegistry:
    """Registry of all table engine metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Query metrics
        self.queries_total = Counter(
            "table_engine_queries_total",
            "Total number of table operations executed",
            ["query_type", "status"],  # status: success, error
            registry=self._registry,
        )

        self.query_latency_seconds = Histogram(
            "table_engine_query_latency_seconds",
            "Table operation latency in seconds",
            ["query_type"],  # insert, select, less_than, like, left_join
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
            registry=self._registry,
        )

        # Storage metrics
        self.rows_inserted_total = Counter(
            "table_engine_rows_inserted_total",
            "Total rows inserted",
            ["table"],
            registry=self._registry,
        )

        self.tables = Gauge(
            "table_engine_tables",
            "Number of tables in the catalog",
            registry=self._registry,
        )

        # Engine info
        self.info = Info(
            "table_engine",
            "Table engine information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry


# Global metrics registry
_metrics: MetricsRegistry | None = None


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
        from table_engine import __version__

        _metrics.info.info({"version": __version__})
    return _metrics
