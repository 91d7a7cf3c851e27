"""Application layer for the table engine.

The application layer orchestrates domain logic to fulfill use cases.

Exports:
    - TableEngine: Catalog of named tables with instrumented operations
    - TableExistsError: Table name already taken
    - TableNotFoundError: Table name not in the catalog
"""

from table_engine.application.table_engine import (
    TableEngine,
    TableExistsError,
    TableNotFoundError,
)

__all__ = [
    "TableEngine",
    "TableExistsError",
    "TableNotFoundError",
]
