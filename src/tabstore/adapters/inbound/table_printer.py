"""Paginated console rendering of tables."""

from __future__ import annotations

import math
import sys
from typing import Sequence, TextIO

from tabstore.domain.entities import Row, Table

COLUMN_RULE = "----------"


def render_header(table: Table) -> list[str]:
    """Column header line (``i: name (TYPE)``) and its rule line."""
    header = "\t".join(f"{i}: {column}" for i, column in enumerate(table.columns))
    rule = "\t".join(COLUMN_RULE for _ in table.columns)
    return [header, rule]


def render_rows(rows: Sequence[Row]) -> list[str]:
    return ["\t".join(row.format()) for row in rows]


class TablePrinter:
    """Prints a table a page at a time, asking for n/p/q between pages."""

    def __init__(
        self,
        out: TextIO | None = None,
        stdin: TextIO | None = None,
        page_size: int = 10,
    ) -> None:
        self._out = out or sys.stdout
        self._in = stdin or sys.stdin
        self._page_size = page_size

    def page_count(self, table: Table) -> int:
        return math.ceil(table.row_count / self._page_size)

    def render_page(self, table: Table, page: int) -> list[str]:
        """Header plus the rows of one zero-based page."""
        start = page * self._page_size
        rows = table.rows[start:start + self._page_size]
        return render_header(table) + render_rows(rows)

    def print_table(self, table: Table) -> None:
        total = self.page_count(table)
        if total == 0:
            self._write("Table is empty")
            return

        page = 0
        while True:
            for line in self.render_page(table, page):
                self._write(line)
            if total == 1:
                return

            self._write(f"Page {page + 1} of {total}")
            self._write("n: next page, p: previous page, q: quit")
            self._out.write("> ")
            self._out.flush()

            line = self._in.readline()
            if not line:
                return
            command = line.strip().lower()
            if command == "n":
                if page < total - 1:
                    page += 1
                else:
                    self._write("Already at the last page")
            elif command == "p":
                if page > 0:
                    page -= 1
                else:
                    self._write("Already at the first page")
            elif command == "q":
                return
            else:
                self._write(f"Unknown command: {command}")

    def _write(self, line: str) -> None:
        self._out.write(line + "\n")
