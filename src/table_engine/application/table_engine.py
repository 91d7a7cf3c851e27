"""Table Engine - catalog of named tables with instrumented operations.

The domain ``Table`` is usable on its own. ``TableEngine`` adds what an
application around it needs: a catalog that keeps tables by name,
rendering configured from ``Config``, and logging, metrics and a trace
span around every operation.

Usage:
    from table_engine.application import TableEngine
    from table_engine.domain.value_objects import ValueKind

    engine = TableEngine()
    engine.create_table("fruits", [("id", ValueKind.INTEGER), ("name", ValueKind.TEXT)])
    engine.insert("fruits", [("id", 1), ("name", "apple")])
    print(engine.render(engine.like("fruits", "name", "a%")))
"""

from __future__ import annotations

import time
from typing import Any, Callable, Iterable, Mapping, TypeVar, Union

from opentelemetry import trace

from table_engine.domain.entities import Table, TableError
from table_engine.domain.entities.table import ColumnSpec
from table_engine.domain.services import GridRenderer
from table_engine.infrastructure.config import Config, get_config
from table_engine.infrastructure.logging import get_logger
from table_engine.infrastructure.metrics import MetricsRegistry, get_metrics
from table_engine.infrastructure.tracing import ROWS_ATTRIBUTE, query_span

T = TypeVar("T")

Source = Union[str, Table]


class TableExistsError(TableError):
    """Raised when creating a table under a name that is already taken."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Table '{name}' already exists")


class TableNotFoundError(TableError):
    """Raised when a table name is not in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Table '{name}' does not exist")


class TableEngine:
    """Catalog of named tables plus instrumented query entry points.

    Query operations return derived tables and leave the catalog as it
    is; keep a result by passing it to ``register``.
    """

    def __init__(
        self,
        config: Config | None = None,
        metrics: MetricsRegistry | None = None,
        tracer: trace.Tracer | None = None,
    ) -> None:
        self._config = config or get_config()
        self._metrics = metrics or get_metrics()
        self._tracer = tracer
        self._renderer = GridRenderer(margin=self._config.render.margin)
        self._tables: dict[str, Table] = {}
        self._logger = get_logger(__name__)

    @property
    def config(self) -> Config:
        return self._config

    # -- catalog ----------------------------------------------------------

    def create_table(self, name: str, columns: Iterable[ColumnSpec]) -> Table:
        """Create an empty table and add it to the catalog.

        Raises:
            TableExistsError: If the name is taken.
            DuplicateColumnError: If a column name is repeated.
        """
        if name in self._tables:
            raise TableExistsError(name)
        table = Table(name, columns)
        self._store(table)
        self._logger.info("table_created", table=name, columns=table.column_names)
        return table

    def register(self, table: Table) -> None:
        """Add an existing table to the catalog under its own name.

        Raises:
            TableExistsError: If the name is taken.
        """
        if table.name in self._tables:
            raise TableExistsError(table.name)
        self._store(table)
        self._logger.info("table_registered", table=table.name, rows=len(table))

    def get_table(self, name: str) -> Table:
        """Look up a table.

        Raises:
            TableNotFoundError: If no table has this name.
        """
        try:
            return self._tables[name]
        except KeyError:
            raise TableNotFoundError(name) from None

    def drop_table(self, name: str) -> None:
        """Remove a table from the catalog.

        Raises:
            TableNotFoundError: If no table has this name.
        """
        if name not in self._tables:
            raise TableNotFoundError(name)
        del self._tables[name]
        self._metrics.tables.set(len(self._tables))
        self._logger.info("table_dropped", table=name)

    def has_table(self, name: str) -> bool:
        return name in self._tables

    def table_names(self) -> list[str]:
        return list(self._tables)

    def _store(self, table: Table) -> None:
        self._tables[table.name] = table
        self._metrics.tables.set(len(self._tables))

    # -- operations -------------------------------------------------------

    def insert(self, name: str, row: Iterable[tuple[str, Any]] | Mapping[str, Any]) -> None:
        """Insert a row into a catalog table."""
        table = self.get_table(name)
        self._run("insert", name, lambda: table.insert(row))
        self._metrics.rows_inserted_total.labels(table=name).inc()

    # Query sources are catalog names or tables already in hand, such as
    # the result of an earlier query; metrics and spans use ``Table.name``.

    def select(self, source: Source, columns: Iterable[str]) -> Table:
        columns = list(columns)
        table = self._resolve(source)
        return self._run("select", table.name, lambda: table.select(columns))

    def less_than(self, source: Source, column: str, threshold: int) -> Table:
        table = self._resolve(source)
        return self._run("less_than", table.name, lambda: table.less_than(column, threshold))

    def like(self, source: Source, column: str, pattern: str) -> Table:
        table = self._resolve(source)
        return self._run("like", table.name, lambda: table.like(column, pattern))

    def left_join(self, left: Source, right: Source, key: str) -> Table:
        """Left outer join of two tables on ``key``."""
        left_table = self._resolve(left)
        right_table = self._resolve(right)
        return self._run(
            "left_join", left_table.name, lambda: left_table.left_join(right_table, key)
        )

    def render(self, table: Table) -> str:
        """Render a table with the configured grid renderer."""
        return table.render(self._renderer)

    def _resolve(self, source: Source) -> Table:
        if isinstance(source, Table):
            return source
        return self.get_table(source)

    def _run(self, query_type: str, table: str, operation: Callable[[], T]) -> T:
        """Run an operation inside a span, recording metrics and logs.

        Errors are logged and counted, then re-raised unchanged.
        """
        start = time.perf_counter()
        with query_span(query_type, table, tracer=self._tracer) as span:
            try:
                result = operation()
            except (TableError, TypeError, ValueError) as e:
                self._metrics.queries_total.labels(
                    query_type=query_type, status="error"
                ).inc()
                self._logger.warning(
                    "operation_failed", query_type=query_type, table=table, error=str(e)
                )
                raise
            finally:
                self._metrics.query_latency_seconds.labels(query_type=query_type).observe(
                    time.perf_counter() - start
                )
            if isinstance(result, Table):
                span.set_attribute(ROWS_ATTRIBUTE, len(result))

        self._metrics.queries_total.labels(query_type=query_type, status="success").inc()
        self._logger.debug("operation_completed", query_type=query_type, table=table)
        return result
