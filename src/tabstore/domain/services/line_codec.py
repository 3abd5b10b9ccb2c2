"""Line-oriented text codec for catalog and table files.

Catalog file, one line per table::

    people,people.tbl
    orders,/var/data/orders.tbl

The first comma separates name from path, so table names cannot contain
commas. A path containing a comma is kept whole because everything after
the first comma is the path.

Table file::

    name,STRING          <- column block: "name,TYPE", split at the last comma
    age,INTEGER
    ---                  <- separator
    "Alice",30           <- one line per row, cells in Cell.format() form
    "He said, \\"hi\\"",NULL

Data lines are split with a quote-aware tokenizer: commas inside a quoted
region do not split, and inside quotes a backslash escapes the following
character. Escapes are left in the field text for Cell.parse to undo, so
STRING values holding commas, quotes or backslashes survive a round trip.
Values holding line breaks cannot be represented; ``encode_table`` refuses
them with FormatError rather than write a file that would not load back.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from tabstore.domain.entities import Cell, Row, Table
from tabstore.domain.errors import FormatError
from tabstore.domain.value_objects import Column, DataType

SECTION_SEPARATOR = "---"
FIELD_SEPARATOR = ","

# Universal-newline reading splits on both
_LINE_BREAKS = re.compile(r"[\r\n]")


def split_fields(line: str, separator: str | None = FIELD_SEPARATOR) -> list[str]:
    """Split a line into fields, honouring double-quoted regions.

    Args:
        line: The text to split (without its line terminator).
        separator: A single separator character, or None to split on runs
            of whitespace and drop empty fields.

    Returns:
        The raw fields, quotes and escapes included. With a separator
        character the result always has at least one (possibly empty) field.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    escape_next = False

    for ch in line:
        if escape_next:
            current.append(ch)
            escape_next = False
        elif ch == "\\" and in_quotes:
            current.append(ch)
            escape_next = True
        elif ch == '"':
            in_quotes = not in_quotes
            current.append(ch)
        elif not in_quotes and _is_separator(ch, separator):
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)

    fields.append("".join(current))

    if separator is None:
        return [f for f in fields if f]
    return fields


def _is_separator(ch: str, separator: str | None) -> bool:
    if separator is None:
        return ch.isspace()
    return ch == separator


# -- catalog ---------------------------------------------------------------


def format_catalog_entry(name: str, path: str) -> str:
    return f"{name}{FIELD_SEPARATOR}{path}"


def parse_catalog_entry(line: str) -> tuple[str, str] | None:
    """Parse ``name,path``; returns None for a line without a comma."""
    name, sep, path = line.partition(FIELD_SEPARATOR)
    if not sep:
        return None
    return name, path


# -- table files -----------------------------------------------------------


def format_column(column: Column) -> str:
    return f"{column.name}{FIELD_SEPARATOR}{column.type}"


def parse_column(line: str) -> Column | None:
    """Parse ``name,TYPE``; returns None for a line without a comma.

    Raises:
        FormatError: If TYPE is not a known data type name.
    """
    name, sep, type_name = line.rpartition(FIELD_SEPARATOR)
    if not sep:
        return None
    return Column(name, DataType.from_name(type_name))


def format_row(row: Row) -> str:
    return FIELD_SEPARATOR.join(row.format())


def parse_row(line: str, columns: tuple[Column, ...] | list[Column]) -> Row | None:
    """Parse a data line against the declared columns.

    Returns:
        The parsed row, or None when the field count differs from the
        column count.

    Raises:
        FormatError: If a field is not a valid literal of its column's type.
    """
    fields = split_fields(line)
    if len(fields) != len(columns):
        return None
    return Row(Cell.parse(text, column.type) for text, column in zip(fields, columns))


def ensure_encodable(table: Table) -> None:
    """Check that every cell of a table fits on one file line.

    Raises:
        FormatError: If a STRING cell contains a line break; the message
            names the table, the 1-based row and the column ordinal.
    """
    for row_no, row in enumerate(table.rows, start=1):
        for index, cell in enumerate(row):
            if cell.type is DataType.STRING and _LINE_BREAKS.search(cell.value):
                raise FormatError(
                    f"Table '{table.name}' row {row_no}, column {index}: "
                    "STRING values with line breaks cannot be saved"
                )


def encode_table(table: Table) -> list[str]:
    """Encode a table as the lines of a table file (without terminators).

    Raises:
        FormatError: If a value cannot be written on a single line.
    """
    ensure_encodable(table)
    lines = [format_column(column) for column in table.columns]
    lines.append(SECTION_SEPARATOR)
    lines.extend(format_row(row) for row in table.rows)
    return lines


@dataclass
class DecodedTable:
    """A decoded table plus the 1-based line numbers that were skipped."""

    table: Table
    skipped_lines: list[int] = field(default_factory=list)


def decode_table(name: str, lines: Iterable[str]) -> DecodedTable:
    """Decode the lines of a table file.

    Column lines without a comma are ignored. Data lines whose field count
    does not match the columns are skipped and reported in the result.

    Raises:
        FormatError: On an unknown type name or a malformed literal.
    """
    result = DecodedTable(Table(name))
    table = result.table
    reading_columns = True

    for line_no, line in enumerate(lines, start=1):
        if line == SECTION_SEPARATOR:
            reading_columns = False
            continue

        if reading_columns:
            column = parse_column(line)
            if column is not None:
                table.add_column(column.name, column.type)
            continue

        row = parse_row(line, table.columns)
        if row is None:
            result.skipped_lines.append(line_no)
        else:
            table.add_row(row)

    return result
