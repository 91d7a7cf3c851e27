"""Value objects for the table engine domain.

Value objects are immutable types that represent domain concepts.
They have no identity - two value objects with the same attributes are equal.

Exports:
    - ValueKind: Column domain (INTEGER, TEXT)
    - Value: Tagged cell value with optional payload
    - NULL_LITERAL: Rendered text of a null cell
    - INT32_MIN, INT32_MAX: Integer payload bounds
"""

from table_engine.domain.value_objects.value import (
    INT32_MAX,
    INT32_MIN,
    NULL_LITERAL,
    Value,
    ValueKind,
)

__all__ = [
    "Value",
    "ValueKind",
    "NULL_LITERAL",
    "INT32_MIN",
    "INT32_MAX",
]
