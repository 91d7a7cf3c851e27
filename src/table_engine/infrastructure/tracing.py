"""OpenTelemetry tracing for table operations.

Spans are always created through the OpenTelemetry API. Unless
``setup_tracing`` installs an SDK provider they are no-ops, so an engine
used as a library costs nothing until an exporter is configured.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from table_engine.infrastructure.config import ObservabilityConfig

INSTRUMENTATION_NAME = "table_engine"

QUERY_TYPE_ATTRIBUTE = "table_engine.query_type"
TABLE_ATTRIBUTE = "table_engine.table"
ROWS_ATTRIBUTE = "table_engine.rows"


def setup_tracing(observability: ObservabilityConfig) -> trace.Tracer | None:
    """
    Install an SDK tracer provider when an exporter is configured.

    Args:
        observability: ``otel_endpoint`` selects OTLP export,
            ``console_traces`` prints spans to stdout

    Returns:
        The tracer, or None when no exporter is configured
    """
    if not (observability.otel_endpoint or observability.console_traces):
        return None

    from table_engine import __version__

    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": observability.otel_service_name,
                "service.version": __version__,
            }
        )
    )
    if observability.otel_endpoint:
        exporter = OTLPSpanExporter(endpoint=observability.otel_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(exporter))
    if observability.console_traces:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    return provider.get_tracer(INSTRUMENTATION_NAME)


def get_tracer() -> trace.Tracer:
    """Tracer from whatever provider is installed globally."""
    return trace.get_tracer(INSTRUMENTATION_NAME)


@contextmanager
def query_span(
    query_type: str,
    table: str,
    tracer: trace.Tracer | None = None,
) -> Generator[trace.Span, None, None]:
    """
    Span named ``table_engine.<query_type>`` tagged with the source table.

    Exceptions propagate; the span records them and is marked as failed.

    Args:
        query_type: Operation name, e.g. ``select`` or ``left_join``
        table: Name of the (left) source table
        tracer: Tracer to use instead of the global one

    Yields:
        The span, so callers can add ``ROWS_ATTRIBUTE`` once the result
        is known
    """
    tracer = tracer or get_tracer()
    with tracer.start_as_current_span(
        f"table_engine.{query_type}",
        attributes={QUERY_TYPE_ATTRIBUTE: query_type, TABLE_ATTRIBUTE: table},
    ) as span:
        yield span
