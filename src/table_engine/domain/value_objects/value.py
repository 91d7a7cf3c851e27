"""Cell values for the table engine.

A value is a tagged pair of (kind, payload). The kind says which domain a
column belongs to; the payload is either a concrete Python value or None.
Null is therefore not a type of its own but the unset payload of a kind,
so ``Value.integer()`` and ``Value.text()`` are two different nulls.

Example:
    >>> Value.integer(42).display_width()
    2
    >>> Value.text().is_null
    True
    >>> Value.integer() == Value.text()
    False
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

NULL_LITERAL = "NULL"
"""Text used for null cells. Its length is also the display width of a null."""


class ValueKind(Enum):
    """Domain of a column."""

    INTEGER = "integer"
    TEXT = "text"

    def __str__(self) -> str:
        return self.name


Payload = Union[int, str, None]


@dataclass(frozen=True, slots=True)
class Value:
    """Immutable tagged cell value.

    Attributes:
        kind: Domain of the value.
        payload: 32-bit signed int for INTEGER, str for TEXT, or None (null).
    """

    kind: ValueKind
    payload: Payload = None

    def __post_init__(self) -> None:
        """Validate the payload against the kind."""
        if self.payload is None:
            return
        if self.kind is ValueKind.INTEGER:
            if isinstance(self.payload, bool) or not isinstance(self.payload, int):
                raise TypeError(
                    f"INTEGER payload must be int, got {type(self.payload).__name__}"
                )
            if not INT32_MIN <= self.payload <= INT32_MAX:
                raise ValueError(
                    f"INTEGER payload {self.payload} outside 32-bit range "
                    f"[{INT32_MIN}, {INT32_MAX}]"
                )
        elif not isinstance(self.payload, str):
            raise TypeError(f"TEXT payload must be str, got {type(self.payload).__name__}")

    @classmethod
    def integer(cls, payload: int | None = None) -> Value:
        """Create an INTEGER value (null when payload is omitted)."""
        return cls(ValueKind.INTEGER, payload)

    @classmethod
    def text(cls, payload: str | None = None) -> Value:
        """Create a TEXT value (null when payload is omitted)."""
        return cls(ValueKind.TEXT, payload)

    @classmethod
    def null(cls, kind: ValueKind) -> Value:
        """Create the null of the given kind."""
        return cls(kind, None)

    @classmethod
    def coerce(cls, raw: Any, kind: ValueKind) -> Value:
        """Turn a raw Python scalar into a value of ``kind``.

        A ``Value`` is returned as is, ``None`` becomes the null of ``kind``.
        Any other scalar must match the kind's Python type.

        Raises:
            TypeError: If the scalar does not belong to ``kind``.
            ValueError: If an integer is outside the 32-bit range.
        """
        if isinstance(raw, Value):
            return raw
        if raw is None:
            return cls.null(kind)
        return cls(kind, raw)

    @property
    def is_null(self) -> bool:
        return self.payload is None

    def display_width(self) -> int:
        """Number of character cells needed to print this value."""
        if self.payload is None:
            return len(NULL_LITERAL)
        if self.kind is ValueKind.INTEGER:
            # str() gives the digit count plus the sign for negatives
            return len(str(self.payload))
        return len(self.payload)

    def __str__(self) -> str:
        if self.payload is None:
            return NULL_LITERAL
        return str(self.payload)

    def __repr__(self) -> str:
        return f"{self.kind.name.capitalize()}({self.payload!r})"
