"""Nested-loop inner join of two tables."""

from __future__ import annotations

from tabstore.domain.entities import Row, Table


def join_name(left: str, right: str) -> str:
    """Name of the table produced by joining ``left`` with ``right``."""
    return f"{left}_{right}_join"


def inner_join(left: Table, left_index: int, right: Table, right_index: int) -> Table:
    """Join two tables on equal cells.

    The result holds every column of ``left`` renamed ``"{left}.{name}"``
    followed by every column of ``right`` renamed ``"{right}.{name}"``.
    For each pair of rows (left outer, right inner) whose join cells are
    equal, it holds one row of copied left cells then copied right cells.
    Null join cells are equal to each other.

    Cost is O(|left| x |right|); there are no indexes to probe.

    Raises:
        ColumnIndexError: On the first out-of-range join cell access.
    """
    result = Table(join_name(left.name, right.name))
    for column in left.columns:
        result.add_column(f"{left.name}.{column.name}", column.type)
    for column in right.columns:
        result.add_column(f"{right.name}.{column.name}", column.type)

    for left_row in left.rows:
        key = left_row.cell(left_index)
        for right_row in right.rows:
            if key == right_row.cell(right_index):
                result.add_row(Row([*left_row.copy(), *right_row.copy()]))

    return result
