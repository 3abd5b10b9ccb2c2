"""Domain entities for the table store.

Exports:
    - Cell: Typed, nullable scalar with text parse/format rules
    - Row: Fixed-arity sequence of cells
    - Table: Columns + rows with schema evolution and query operations
"""

from tabstore.domain.entities.cell import Cell
from tabstore.domain.entities.row import Row
from tabstore.domain.entities.table import Table

__all__ = [
    "Cell",
    "Row",
    "Table",
]
