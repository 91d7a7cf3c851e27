"""Table entity: typed schema, row storage and query operations.

A table owns an ordered schema of typed columns, a per-column render width
cache and a list of rows. Rows are fixed-position tuples of ``Value``
indexed by schema position, so every column is present in every row;
a column left out of an insert holds the null of its declared kind.

Only ``insert`` mutates a table. ``select``, ``less_than``, ``like`` and
``left_join`` each build a new table. Rows and values are immutable, so a
derived table never shares mutable state with its source.

Example:
    >>> fruits = Table("fruits", [("id", ValueKind.INTEGER), ("name", ValueKind.TEXT)])
    >>> fruits.insert([("id", 1), ("name", "apple")])
    >>> fruits.insert([("id", 2), ("name", "banana")])
    >>> fruits.like("name", "b%").records()
    [{'id': 2, 'name': 'banana'}]
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, TextIO, Union

from table_engine.domain.services.grid_renderer import GridRenderer
from table_engine.domain.services.like_matcher import LikePattern
from table_engine.domain.value_objects import Value, ValueKind

logger = logging.getLogger(__name__)

Row = tuple[Value, ...]
"""A row: one value per schema column, in schema order."""

ColumnSpec = Union["Column", tuple[str, Union[ValueKind, Value]]]


class TableError(Exception):
    """Base class for table errors."""

    pass


class UnknownColumnError(TableError, KeyError):
    """Raised when a column name is not part of a table's schema."""

    def __init__(self, column: str, table: str) -> None:
        self.column = column
        self.table = table
        super().__init__(f'Unknown column "{column}" in "{table}"')

    def __str__(self) -> str:
        return self.args[0]


class DuplicateColumnError(TableError):
    """Raised when a column name appears twice in a definition or insert."""

    def __init__(self, column: str, table: str) -> None:
        self.column = column
        self.table = table
        super().__init__(f'Duplicate column name "{column}" in "{table}"')


class JoinKeyError(TableError):
    """Raised when a join key is missing from one side of a join."""

    def __init__(self, key: str, table: str) -> None:
        self.key = key
        self.table = table
        super().__init__(f'Join key "{key}" not found in "{table}"')


@dataclass(frozen=True, slots=True)
class Column:
    """A schema column: name and declared kind."""

    name: str
    kind: ValueKind

    def __str__(self) -> str:
        return f"{self.name} {self.kind}"


class Table:
    """In-memory table with a fixed, typed schema."""

    def __init__(self, name: str, columns: Iterable[ColumnSpec]) -> None:
        """Create an empty table.

        Args:
            name: Table name, used in error messages.
            columns: Ordered ``(name, kind)`` pairs or ``Column`` objects.
                A ``Value`` may stand in for a kind (its kind is used).

        Raises:
            DuplicateColumnError: If a column name is repeated.
        """
        self._name = name
        self._columns: list[Column] = []
        self._positions: dict[str, int] = {}
        self._widths: list[int] = []
        self._rows: list[Row] = []

        for spec in columns:
            column = spec if isinstance(spec, Column) else _column_from_pair(*spec)
            if column.name in self._positions:
                raise DuplicateColumnError(column.name, name)
            self._positions[column.name] = len(self._columns)
            self._columns.append(column)
            # Headers never truncate
            self._widths.append(len(column.name))

    @classmethod
    def _derive(
        cls,
        name: str,
        columns: list[Column],
        widths: list[int],
        rows: list[Row],
    ) -> Table:
        """Build a table from already validated parts."""
        table = cls(name, columns)
        table._widths = list(widths)
        table._rows = rows
        return table

    # -- schema -----------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def columns(self) -> tuple[Column, ...]:
        return tuple(self._columns)

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self._columns]

    @property
    def rows(self) -> tuple[Row, ...]:
        return tuple(self._rows)

    def has_column(self, name: str) -> bool:
        return name in self._positions

    def position(self, name: str) -> int:
        """Schema position of a column.

        Raises:
            UnknownColumnError: If the column does not exist.
        """
        try:
            return self._positions[name]
        except KeyError:
            raise UnknownColumnError(name, self._name) from None

    def kind(self, name: str) -> ValueKind:
        return self._columns[self.position(name)].kind

    def width(self, name: str) -> int:
        """Current render width of a column."""
        return self._widths[self.position(name)]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(tuple(self._rows))

    def records(self) -> list[dict[str, Any]]:
        """Rows as ``{column: payload}`` dicts, nulls as None."""
        names = self.column_names
        return [
            {name: value.payload for name, value in zip(names, row)}
            for row in self._rows
        ]

    # -- mutation ---------------------------------------------------------

    def insert(self, row: Iterable[tuple[str, Any]] | Mapping[str, Any]) -> None:
        """Validate and append a row.

        Args:
            row: ``(column, value)`` pairs or a mapping. Values may be
                ``Value`` objects or raw scalars (int, str, None), which
                are coerced to the column's declared kind. Columns left
                out are stored as null.

        Raises:
            UnknownColumnError: If a column is not in the schema.
            DuplicateColumnError: If a column is given twice.
            TypeError: If a raw scalar does not fit the column kind.
            ValueError: If an integer is outside the 32-bit range.

        The table is left untouched when any of these is raised.
        """
        pairs = row.items() if isinstance(row, Mapping) else row
        values = [Value.null(column.kind) for column in self._columns]
        seen: set[str] = set()

        for name, raw in pairs:
            pos = self._positions.get(name)
            if pos is None:
                raise UnknownColumnError(name, self._name)
            if name in seen:
                raise DuplicateColumnError(name, self._name)
            seen.add(name)
            values[pos] = Value.coerce(raw, self._columns[pos].kind)

        for pos, value in enumerate(values):
            self._widths[pos] = max(self._widths[pos], value.display_width())
        self._rows.append(tuple(values))
        logger.debug(f"Inserted row {len(self._rows)} into {self._name}")

    # -- queries ----------------------------------------------------------

    def select(self, columns: Iterable[str]) -> Table:
        """Project onto ``columns``, in the given order.

        Names missing from the schema are dropped silently; a repeated
        name is kept once, at its first position.
        """
        picks: list[int] = []
        for name in columns:
            pos = self._positions.get(name)
            if pos is not None and pos not in picks:
                picks.append(pos)

        return Table._derive(
            self._name,
            [self._columns[p] for p in picks],
            [self._widths[p] for p in picks],
            [tuple(row[p] for p in picks) for row in self._rows],
        )

    def less_than(self, column: str, threshold: int) -> Table:
        """Keep rows whose ``column`` holds a non-null integer below ``threshold``.

        Raises:
            UnknownColumnError: If the column does not exist.
        """
        pos = self.position(column)
        return self._filtered(
            lambda value: value.kind is ValueKind.INTEGER
            and value.payload is not None
            and value.payload < threshold,
            pos,
        )

    def like(self, column: str, pattern: str) -> Table:
        """Keep rows whose ``column`` holds non-null text matching ``pattern``.

        Raises:
            UnknownColumnError: If the column does not exist.
        """
        pos = self.position(column)
        compiled = LikePattern(pattern)
        return self._filtered(
            lambda value: value.kind is ValueKind.TEXT
            and value.payload is not None
            and compiled.matches(value.payload),
            pos,
        )

    def left_join(self, other: Table, key: str) -> Table:
        """Left outer join with ``other`` on equal ``key`` values.

        The result schema is this table's columns followed by every column
        of ``other`` not already present here, with its width copied from
        ``other``. Keys compare by full value equality, so two nulls of the
        same kind match. When several rows of ``other`` match, the last one
        wins. Unmatched rows hold nulls in the imported columns.

        Raises:
            JoinKeyError: If ``key`` is missing from either table.
        """
        if not other.has_column(key):
            raise JoinKeyError(key, other.name)
        if not self.has_column(key):
            raise JoinKeyError(key, self._name)

        left_key = self._positions[key]
        right_key = other._positions[key]
        imported = [
            pos for pos, column in enumerate(other._columns)
            if column.name not in self._positions
        ]
        nulls = tuple(Value.null(other._columns[p].kind) for p in imported)

        rows: list[Row] = []
        for left in self._rows:
            extra = nulls
            for right in other._rows:
                if left[left_key] == right[right_key]:
                    extra = tuple(right[p] for p in imported)
            rows.append(left + extra)

        logger.debug(
            f"Joined {self._name} with {other.name} on {key}: "
            f"{len(imported)} column(s) imported"
        )
        return Table._derive(
            self._name,
            self._columns + [other._columns[p] for p in imported],
            self._widths + [other._widths[p] for p in imported],
            rows,
        )

    def _filtered(self, keep, pos: int) -> Table:
        return Table._derive(
            self._name,
            list(self._columns),
            self._widths,
            [row for row in self._rows if keep(row[pos])],
        )

    # -- rendering --------------------------------------------------------

    def render(self, renderer: GridRenderer | None = None) -> str:
        """Render the table as an ASCII grid."""
        return (renderer or GridRenderer()).render(self)

    def display(self, file: TextIO | None = None, renderer: GridRenderer | None = None) -> None:
        """Write the rendered grid to ``file`` (stdout by default)."""
        (file or sys.stdout).write(self.render(renderer))

    def __repr__(self) -> str:
        columns = ", ".join(str(column) for column in self._columns)
        return f"Table({self._name!r}, [{columns}], rows={len(self._rows)})"


def _column_from_pair(name: str, kind: ValueKind | Value) -> Column:
    if isinstance(kind, Value):
        kind = kind.kind
    return Column(name, kind)
