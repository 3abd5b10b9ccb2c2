"""Column data types and column descriptors.

The DataType of a column decides how its cells are parsed from and
formatted to text, and which operations (numeric aggregation) are legal
on it. The enum value is the textual name written to table files.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tabstore.domain.errors import FormatError


class DataType(Enum):
    """Closed set of cell types."""

    INTEGER = "INTEGER"
    """Signed integer."""

    FLOAT = "FLOAT"
    """Double-precision floating point."""

    STRING = "STRING"
    """Text, written double-quoted with backslash escapes."""

    NULL = "NULL"
    """Type tag of an absent value."""

    @property
    def is_numeric(self) -> bool:
        """Whether aggregate operations are legal on this type."""
        return self in (DataType.INTEGER, DataType.FLOAT)

    @classmethod
    def from_name(cls, name: str) -> DataType:
        """Look up a type by its textual name (case-sensitive).

        Raises:
            FormatError: If the name is not a known type.
        """
        try:
            return cls(name)
        except ValueError as e:
            raise FormatError(f"Unknown data type: {name!r}") from e

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Column:
    """A named, typed position in a table's rows.

    Example:
        >>> col = Column("age", DataType.INTEGER)
        >>> col.name, col.type
        ('age', <DataType.INTEGER: 'INTEGER'>)
    """

    name: str
    type: DataType

    def renamed(self, name: str) -> Column:
        """Return a copy of this column under a new name."""
        return Column(name, self.type)

    def __str__(self) -> str:
        return f"{self.name} ({self.type})"
