"""Error kinds raised by the table store.

Every error derives from TabStoreError and from the builtin exception that
best describes it, so callers may catch either the store-specific class or
the familiar builtin (e.g. ``except ValueError``).
"""

from __future__ import annotations


class TabStoreError(Exception):
    """Base class for all table store errors."""

    pass


class FormatError(TabStoreError, ValueError):
    """Raised when a literal cannot be interpreted as the declared type."""

    pass


class SchemaError(TabStoreError, ValueError):
    """Raised when a row's arity does not match its table's columns."""

    pass


class ColumnIndexError(TabStoreError, IndexError):
    """Raised when a column ordinal is outside the declared columns."""

    def __init__(self, index: int, column_count: int) -> None:
        super().__init__(
            f"Invalid column index: {index} (table has {column_count} columns)"
        )
        self.index = index
        self.column_count = column_count


class TableNotFoundError(TabStoreError, LookupError):
    """Raised when a table name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Table with name '{name}' doesn't exist")
        self.name = name


class DuplicateTableError(TabStoreError, ValueError):
    """Raised when a table name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Table with name '{name}' already exists")
        self.name = name


class ColumnTypeError(TabStoreError, TypeError):
    """Raised when an operation is not legal for a column's declared type."""

    pass


class UnsupportedOperationError(TabStoreError, ValueError):
    """Raised for an unknown aggregate operation keyword."""

    pass


class StorageError(TabStoreError, OSError):
    """Raised when reading or writing a catalog or table file fails."""

    pass


class CatalogNotSetError(TabStoreError, RuntimeError):
    """Raised when saving a registry that has no catalog file yet."""

    pass
