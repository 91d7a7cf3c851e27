"""Fixed-width ASCII grid rendering of tables.

Output layout (margin of one space, two columns):

     +----+--------+
     | id |  name  |
     +----+--------+
     |  1 | apple  |
     |  3 |   NULL |
     +----+--------+

Integers are right-aligned, text is left-aligned and nulls print as a
right-aligned ``NULL``. Column widths come from the table's width cache,
which only ever grows, so a column is never narrower than its header.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from table_engine.domain.value_objects import NULL_LITERAL, Value, ValueKind

if TYPE_CHECKING:
    from table_engine.domain.entities.table import Table


class GridRenderer:
    """Renders a table as an aligned ASCII grid."""

    def __init__(self, margin: int = 1) -> None:
        if margin < 0:
            raise ValueError(f"margin must be non-negative, got {margin}")
        self._margin = " " * margin

    def render(self, table: Table) -> str:
        """Render ``table`` to text, one line per grid row, newline-terminated."""
        widths = [table.width(column.name) for column in table.columns]

        border = self._margin + "+" + "".join("-" * (w + 2) + "+" for w in widths)
        header = self._line(
            f"{column.name:^{w}}" for column, w in zip(table.columns, widths)
        )

        lines = [border, header, border]
        for row in table.rows:
            lines.append(self._line(self._cell(v, w) for v, w in zip(row, widths)))
        lines.append(border)
        return "\n".join(lines) + "\n"

    def _line(self, cells) -> str:
        return self._margin + "|" + "".join(f" {cell} |" for cell in cells)

    @staticmethod
    def _cell(value: Value, width: int) -> str:
        if value.payload is None:
            return f"{NULL_LITERAL:>{width}}"
        if value.kind is ValueKind.INTEGER:
            return f"{value.payload:>{width}}"
        return f"{value.payload:<{width}}"
