"""Table entity - an in-memory relation of typed columns and rows.

Columns are addressed only by ordinal position. Row matching for select,
update, delete, count and aggregate compares the *formatted text* of a
cell against the caller's match text, so ``1`` and ``1.0`` are different
keys and STRING match text must include its double quotes.

Bounds handling:
    - An out-of-range search ordinal means "no row matches" (filter guard).
    - An out-of-range update target ordinal leaves rows unchanged.
    - aggregate raises ColumnIndexError for an out-of-range target ordinal.

Thread Safety:
    Not thread-safe. A multi-client wrapper must serialize access.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from tabstore.domain.entities.cell import Cell
from tabstore.domain.entities.row import Row
from tabstore.domain.errors import ColumnIndexError, ColumnTypeError, SchemaError
from tabstore.domain.value_objects.aggregate_op import AggregateOp, reduce_values
from tabstore.domain.value_objects import Column, DataType


class Table:
    """A named table of typed columns and insertion-ordered rows.

    Example:
        >>> people = Table("people")
        >>> people.add_column("name", DataType.STRING)
        >>> people.add_column("age", DataType.INTEGER)
        >>> people.insert(['"Alice"', "30"])
        >>> people.count(0, '"Alice"')
        1
    """

    def __init__(self, name: str, columns: Iterable[Column] = ()) -> None:
        self._name = name
        self._columns: list[Column] = list(columns)
        self._rows: list[Row] = []

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value

    @property
    def columns(self) -> tuple[Column, ...]:
        return tuple(self._columns)

    @property
    def rows(self) -> tuple[Row, ...]:
        """Rows in insertion order (read-only views owned by the table)."""
        return tuple(self._rows)

    @property
    def column_count(self) -> int:
        return len(self._columns)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def column(self, index: int) -> Column:
        """Get the column at an ordinal.

        Raises:
            ColumnIndexError: If the ordinal is out of range.
        """
        if not self._in_range(index):
            raise ColumnIndexError(index, len(self._columns))
        return self._columns[index]

    # -- schema evolution -------------------------------------------------

    def add_column(self, name: str, data_type: DataType) -> Column:
        """Append a column and backfill every existing row with NULL."""
        column = Column(name, data_type)
        self._columns.append(column)
        for row in self._rows:
            row.append(Cell.null())
        return column

    # -- inserts ----------------------------------------------------------

    def add_row(self, row: Row | Iterable[Cell]) -> Row:
        """Append a row.

        Raises:
            SchemaError: If the row's arity differs from the column count.
        """
        if not isinstance(row, Row):
            row = Row(row)
        if len(row) != len(self._columns):
            raise SchemaError(
                f"Row size {len(row)} doesn't match the number of columns "
                f"({len(self._columns)}) of table '{self._name}'"
            )
        self._rows.append(row)
        return row

    def insert(self, values: Sequence[str]) -> Row:
        """Parse one literal per column and append the resulting row.

        Raises:
            SchemaError: If the number of values differs from the column count.
            FormatError: If a literal does not parse as its column's type.
        """
        if len(values) != len(self._columns):
            raise SchemaError(
                f"Number of values ({len(values)}) doesn't match column count "
                f"({len(self._columns)})"
            )
        row = Row(
            Cell.parse(text, column.type) for text, column in zip(values, self._columns)
        )
        self._rows.append(row)
        return row

    # -- queries ----------------------------------------------------------

    def select(self, column_index: int, match_text: str) -> list[Row]:
        """Return copies of the rows whose cell formats to ``match_text``."""
        return [row.copy() for row in self._matching(column_index, match_text)]

    def count(self, column_index: int, match_text: str) -> int:
        """Count rows whose cell at ``column_index`` formats to ``match_text``."""
        return sum(1 for _ in self._matching(column_index, match_text))

    def update(
        self,
        search_index: int,
        search_text: str,
        target_index: int,
        target_text: str,
    ) -> int:
        """Overwrite the target cell of every matching row.

        ``target_text`` is parsed with the declared type of the target
        column. Nothing changes if the target ordinal is out of range.

        Returns:
            The number of rows updated.

        Raises:
            FormatError: If ``target_text`` does not parse; no row is changed.
        """
        if not self._in_range(target_index):
            return 0

        matches = list(self._matching(search_index, search_text))
        if not matches:
            return 0

        cell = Cell.parse(target_text, self._columns[target_index].type)
        for row in matches:
            row.replace(target_index, cell)
        return len(matches)

    def delete(self, column_index: int, match_text: str) -> int:
        """Remove every matching row in one pass.

        Returns:
            The number of rows removed.
        """
        if not self._in_range(column_index):
            return 0
        before = len(self._rows)
        self._rows = [
            row for row in self._rows if row[column_index].format() != match_text
        ]
        return before - len(self._rows)

    def aggregate(
        self,
        search_index: int,
        search_text: str,
        target_index: int,
        operation: str | AggregateOp,
    ) -> float | None:
        """Aggregate the target column over the matching rows.

        Null cells among the matches are skipped. Rows are matched first:
        with no match the result is None and the target column, its type
        and the operation are not checked.

        Returns:
            The aggregate as a float, or None when no row matches.

        Raises:
            ColumnIndexError: If ``target_index`` is out of range.
            ColumnTypeError: If the target column is not INTEGER or FLOAT.
            UnsupportedOperationError: If ``operation`` is not a known keyword.
        """
        matches = list(self._matching(search_index, search_text))
        if not matches:
            return None

        target = self.column(target_index)
        if not target.type.is_numeric:
            raise ColumnTypeError(
                "Aggregate operations can only be performed on numeric columns, "
                f"column {target_index} ('{target.name}') is {target.type}"
            )
        op = AggregateOp.from_keyword(operation)

        values = [row[target_index].value for row in matches]
        return reduce_values(op, (v for v in values if v is not None))

    # -- helpers ----------------------------------------------------------

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._columns)

    def _matching(self, column_index: int, match_text: str) -> Iterator[Row]:
        if not self._in_range(column_index):
            return
        for row in self._rows:
            if row[column_index].format() == match_text:
                yield row

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        cols = ", ".join(str(c) for c in self._columns)
        return f"Table({self._name!r}, [{cols}], rows={len(self._rows)})"
