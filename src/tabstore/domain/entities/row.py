"""Row entity - an ordered, fixed-arity sequence of cells."""

from __future__ import annotations

from typing import Iterable, Iterator

from tabstore.domain.entities.cell import Cell
from tabstore.domain.errors import ColumnIndexError


class Row:
    """An ordered sequence of cells.

    A row's arity must match its table's column count; the table enforces
    this on insert and keeps it on schema evolution. ``append`` and
    ``replace`` are for the owning Table only; callers change cells through
    Table operations so arity stays in step with the columns.

    Example:
        >>> row = Row([Cell("Alice", DataType.STRING), Cell(30, DataType.INTEGER)])
        >>> len(row), row[1].value
        (2, 30)
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: Iterable[Cell] = ()) -> None:
        self._cells: list[Cell] = list(cells)

    @property
    def cells(self) -> tuple[Cell, ...]:
        """The row's cells, in column order."""
        return tuple(self._cells)

    def cell(self, index: int) -> Cell:
        """Get the cell at a column ordinal.

        Raises:
            ColumnIndexError: If the ordinal is out of range (negative
                ordinals are out of range too).
        """
        if 0 <= index < len(self._cells):
            return self._cells[index]
        raise ColumnIndexError(index, len(self._cells))

    def format(self) -> list[str]:
        """Text form of every cell, in column order."""
        return [cell.format() for cell in self._cells]

    def copy(self) -> Row:
        """Return a detached copy of this row."""
        return Row(cell.copy() for cell in self._cells)

    def append(self, cell: Cell) -> None:
        """Add a cell at the end (Table.add_column backfill)."""
        self._cells.append(cell)

    def replace(self, index: int, cell: Cell) -> None:
        """Swap the cell at an ordinal (Table.update)."""
        self._cells[index] = cell

    def __getitem__(self, index: int) -> Cell:
        return self.cell(index)

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Row({', '.join(self.format())})"
