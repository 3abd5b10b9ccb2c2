"""Domain layer: the typed cell/row/table model and the services over it.

The domain has no I/O. Persistence goes through the outbound TableStorage
port and catalog management lives in the application layer.
"""

from tabstore.domain.entities import Cell, Row, Table
from tabstore.domain.errors import (
    CatalogNotSetError,
    ColumnIndexError,
    ColumnTypeError,
    DuplicateTableError,
    FormatError,
    SchemaError,
    StorageError,
    TableNotFoundError,
    TabStoreError,
    UnsupportedOperationError,
)
from tabstore.domain.value_objects import AggregateOp, Column, DataType

__all__ = [
    "AggregateOp",
    "Cell",
    "Column",
    "DataType",
    "Row",
    "Table",
    # Errors
    "CatalogNotSetError",
    "ColumnIndexError",
    "ColumnTypeError",
    "DuplicateTableError",
    "FormatError",
    "SchemaError",
    "StorageError",
    "TableNotFoundError",
    "TabStoreError",
    "UnsupportedOperationError",
]
