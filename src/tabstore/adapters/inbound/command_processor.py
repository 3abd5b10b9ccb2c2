"""Interactive command loop over a Registry.

Each input line is one command. Arguments are separated by whitespace
outside double quotes, so STRING literals may contain spaces:

    insert people "Alice Smith" 30
    select 0 "Alice Smith" people

Engine errors are printed as ``Error: <message>`` and the loop carries on.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, TextIO

from tabstore.adapters.inbound.table_printer import TablePrinter
from tabstore.application.registry import Registry
from tabstore.domain.entities import Table
from tabstore.domain.errors import TabStoreError
from tabstore.domain.services import split_fields
from tabstore.domain.value_objects import DataType
from tabstore.infrastructure.config import Config, get_config
from tabstore.infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Command:
    """A command word, its minimum argument count and its usage line."""

    name: str
    min_args: int
    usage: str
    description: str


COMMANDS: dict[str, Command] = {
    c.name: c
    for c in (
        Command("open", 1, "open <file name>", "Open a database from a file"),
        Command("close", 0, "close", "Close the current database"),
        Command("save", 0, "save", "Save the database"),
        Command("saveas", 1, "saveas <file name>", "Save the database to a new file"),
        Command("exit", 0, "exit", "Exit the program"),
        Command("help", 0, "help", "Show this help message"),
        Command("import", 1, "import <file name>", "Import a table from a file"),
        Command("showtables", 0, "showtables", "Show all tables in the database"),
        Command("describe", 1, "describe <name>", "Show information about a table"),
        Command("print", 1, "print <name>", "Show all rows from a table"),
        Command("export", 2, "export <name> <file name>", "Export a table to a file"),
        Command("create", 1, "create <table name>", "Create an empty table"),
        Command(
            "select", 3, "select <column-n> <value> <table name>",
            "Select rows from a table",
        ),
        Command(
            "addcolumn", 3, "addcolumn <table name> <column name> <column type>",
            "Add a new column to a table",
        ),
        Command(
            "update", 5,
            "update <table name> <search column n> <search value> "
            "<target column n> <target value>",
            "Update rows in a table",
        ),
        Command(
            "delete", 3, "delete <table name> <search column n> <search value>",
            "Delete rows from a table",
        ),
        Command(
            "insert", 1, "insert <table name> <column 1> ... <column n>",
            "Insert a new row into a table",
        ),
        Command(
            "innerjoin", 4, "innerjoin <table 1> <column n1> <table 2> <column n2>",
            "Join two tables",
        ),
        Command("rename", 2, "rename <old name> <new name>", "Rename a table"),
        Command(
            "count", 3, "count <table name> <search column n> <search value>",
            "Count rows in a table",
        ),
        Command(
            "aggregate", 5,
            "aggregate <table name> <search column n> <search value> "
            "<target column n> <operation>",
            "Perform an aggregation (sum, product, maximum, minimum)",
        ),
    )
}


def parse_ordinal(text: str) -> int:
    """Parse a column number argument."""
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"Invalid column number: {text}") from None


class CommandProcessor:
    """Reads commands, calls the engine and writes the results."""

    def __init__(
        self,
        registry: Registry | None = None,
        out: TextIO | None = None,
        stdin: TextIO | None = None,
        config: Config | None = None,
    ) -> None:
        self._config = config or get_config()
        self._registry = registry if registry is not None else Registry(config=self._config)
        self._out = out or sys.stdout
        self._in = stdin or sys.stdin
        self._printer = TablePrinter(self._out, self._in, self._config.display.page_size)
        self._handlers: dict[str, Callable[[list[str]], bool]] = {
            name: getattr(self, f"_cmd_{name}") for name in COMMANDS
        }

    @property
    def registry(self) -> Registry:
        return self._registry

    def run(self) -> None:
        """Run the loop until ``exit`` or end of input."""
        self._write("Database Management System")
        self._write("Type 'help' for a list of commands")
        while True:
            self._out.write("> ")
            self._out.flush()
            line = self._in.readline()
            if not line:
                break
            if not self.execute(line):
                break

    def execute(self, line: str) -> bool:
        """Execute one command line.

        Returns:
            False when the command asks to exit, True otherwise.
        """
        parts = split_fields(line.strip(), separator=None)
        if not parts:
            return True

        name = parts[0].lower()
        command = COMMANDS.get(name)
        if command is None:
            self._write(f"Unknown command: {name}")
            return True

        args = parts[1:]
        if len(args) < command.min_args:
            self._write(f"Usage: {command.usage}")
            return True

        try:
            return self._handlers[name](args)
        except (TabStoreError, ValueError) as e:
            logger.debug("command_failed", command=name, error=str(e))
            self._write(f"Error: {e}")
            return True

    # -- catalog commands -------------------------------------------------

    def _cmd_open(self, args: list[str]) -> bool:
        self._registry.open(args[0])
        self._write(f"Database opened: {args[0]}")
        return True

    def _cmd_close(self, args: list[str]) -> bool:
        self._registry.close()
        self._write("Database closed")
        return True

    def _cmd_save(self, args: list[str]) -> bool:
        self._registry.save()
        self._write("Database saved")
        return True

    def _cmd_saveas(self, args: list[str]) -> bool:
        self._registry.save_as(args[0])
        self._write(f"Database saved as: {args[0]}")
        return True

    def _cmd_exit(self, args: list[str]) -> bool:
        return False

    def _cmd_help(self, args: list[str]) -> bool:
        self._write("Available commands:")
        for command in COMMANDS.values():
            self._write(f"{command.usage} - {command.description}")
        return True

    def _cmd_import(self, args: list[str]) -> bool:
        self._registry.import_table(args[0])
        self._write(f"Table imported from: {args[0]}")
        return True

    def _cmd_export(self, args: list[str]) -> bool:
        self._registry.export_table(args[0], args[1])
        self._write(f"Table exported to: {args[1]}")
        return True

    def _cmd_showtables(self, args: list[str]) -> bool:
        names = self._registry.table_names()
        if not names:
            self._write("No tables in the database")
            return True
        self._write("Tables:")
        for name in names:
            self._write(f"- {name}")
        return True

    def _cmd_create(self, args: list[str]) -> bool:
        table = self._registry.create_table(args[0])
        self._write(f"Table created: {table.name}")
        return True

    def _cmd_rename(self, args: list[str]) -> bool:
        self._registry.rename_table(args[0], args[1])
        self._write(f"Table renamed from '{args[0]}' to '{args[1]}'")
        return True

    def _cmd_innerjoin(self, args: list[str]) -> bool:
        joined = self._registry.inner_join(
            args[0], parse_ordinal(args[1]), args[2], parse_ordinal(args[3])
        )
        self._write(f"Joined table created: {joined.name}")
        return True

    # -- table commands ---------------------------------------------------

    def _cmd_describe(self, args: list[str]) -> bool:
        table = self._registry.get_table(args[0])
        self._write(f"Table: {table.name}")
        self._write("Columns:")
        for i, column in enumerate(table.columns):
            self._write(f"{i}: {column}")
        return True

    def _cmd_print(self, args: list[str]) -> bool:
        self._printer.print_table(self._registry.get_table(args[0]))
        return True

    def _cmd_select(self, args: list[str]) -> bool:
        index, value, name = parse_ordinal(args[0]), args[1], args[2]
        table = self._registry.get_table(name)
        selected = Table(f"{name}_selected", table.columns)
        for row in table.select(index, value):
            selected.add_row(row)
        self._printer.print_table(selected)
        return True

    def _cmd_addcolumn(self, args: list[str]) -> bool:
        table = self._registry.get_table(args[0])
        table.add_column(args[1], DataType.from_name(args[2].upper()))
        self._write(f"Column added: {args[1]}")
        return True

    def _cmd_update(self, args: list[str]) -> bool:
        table = self._registry.get_table(args[0])
        updated = table.update(
            parse_ordinal(args[1]), args[2], parse_ordinal(args[3]), args[4]
        )
        self._write(f"Rows updated: {updated}")
        return True

    def _cmd_delete(self, args: list[str]) -> bool:
        table = self._registry.get_table(args[0])
        deleted = table.delete(parse_ordinal(args[1]), args[2])
        self._write(f"Rows deleted: {deleted}")
        return True

    def _cmd_insert(self, args: list[str]) -> bool:
        table = self._registry.get_table(args[0])
        table.insert(args[1:])
        self._write("Row inserted")
        return True

    def _cmd_count(self, args: list[str]) -> bool:
        table = self._registry.get_table(args[0])
        self._write(f"Count: {table.count(parse_ordinal(args[1]), args[2])}")
        return True

    def _cmd_aggregate(self, args: list[str]) -> bool:
        table = self._registry.get_table(args[0])
        result = table.aggregate(
            parse_ordinal(args[1]), args[2], parse_ordinal(args[3]), args[4]
        )
        shown = "NULL" if result is None else repr(result)
        self._write(f"Result of {args[4]}: {shown}")
        return True

    def _write(self, line: str) -> None:
        self._out.write(line + "\n")
