"""Domain entities for the table engine.

Entities are objects with identity that have a lifecycle. Unlike value
objects, two tables with the same rows are still two different tables.

Exports:
    Table:
        - Table: Typed in-memory table with query operations
        - Column: Schema column (name, kind)
        - Row: Fixed-position tuple of values

    Errors:
        - TableError: Base class for table errors
        - UnknownColumnError: Column not in schema
        - DuplicateColumnError: Column repeated in a definition or insert
        - JoinKeyError: Join key missing from one side
"""

from table_engine.domain.entities.table import (
    Column,
    DuplicateColumnError,
    JoinKeyError,
    Row,
    Table,
    TableError,
    UnknownColumnError,
)

__all__ = [
    # Table
    "Table",
    "Column",
    "Row",
    # Errors
    "TableError",
    "UnknownColumnError",
    "DuplicateColumnError",
    "JoinKeyError",
]
