"""
Table Engine - minimal in-memory tabular data engine

Schema-typed columns (nullable integer/text), row storage, projection,
range filtering, SQL LIKE matching, left outer join and fixed-width
ASCII rendering.
"""

__version__ = "0.1.0"

from table_engine.domain.entities import (
    Column,
    DuplicateColumnError,
    JoinKeyError,
    Table,
    TableError,
    UnknownColumnError,
)
from table_engine.domain.value_objects import Value, ValueKind

__all__ = [
    "Table",
    "Column",
    "Value",
    "ValueKind",
    "TableError",
    "UnknownColumnError",
    "DuplicateColumnError",
    "JoinKeyError",
]
