"""Unit tests for the interactive command processor."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from tabstore.adapters.inbound import CommandProcessor
from tabstore.adapters.inbound.command_processor import COMMANDS, parse_ordinal
from tabstore.application import Registry
from tabstore.domain.entities import Table
from tabstore.infrastructure.config import Config


class Console:
    """Drives a CommandProcessor and collects its output."""

    def __init__(self, registry: Registry, config: Config) -> None:
        self.out = io.StringIO()
        self.processor = CommandProcessor(
            registry, out=self.out, stdin=io.StringIO(), config=config
        )

    def __call__(self, line: str) -> list[str]:
        self.out.seek(0)
        self.out.truncate()
        self.processor.execute(line)
        return self.out.getvalue().splitlines()


@pytest.fixture
def console(registry: Registry, test_config: Config, people: Table) -> Console:
    registry.add_table(people)
    return Console(registry, test_config)


@pytest.mark.unit
class TestParsing:
    """Tests for command line parsing."""

    def test_parse_ordinal(self) -> None:
        assert parse_ordinal("3") == 3

    def test_parse_ordinal_invalid(self) -> None:
        with pytest.raises(ValueError, match="Invalid column number"):
            parse_ordinal("x")

    def test_blank_line(self, console: Console) -> None:
        assert console("   ") == []

    def test_unknown_command(self, console: Console) -> None:
        assert console("drop people") == ["Unknown command: drop"]

    def test_command_word_case_insensitive(self, console: Console) -> None:
        assert console("COUNT people 0 \"Bob\"") == ["Count: 1"]

    def test_missing_arguments(self, console: Console) -> None:
        assert console("update people 0") == [f"Usage: {COMMANDS['update'].usage}"]

    def test_help_lists_every_command(self, console: Console) -> None:
        lines = console("help")

        assert lines[0] == "Available commands:"
        assert len(lines) == len(COMMANDS) + 1
        assert "open <file name> - Open a database from a file" in lines

    def test_exit_stops(self, registry: Registry, test_config: Config) -> None:
        processor = CommandProcessor(registry, out=io.StringIO(), config=test_config)

        assert processor.execute("exit") is False
        assert processor.execute("showtables") is True


@pytest.mark.unit
class TestTableCommands:
    """Tests for commands acting on one table."""

    def test_showtables(self, console: Console, registry: Registry) -> None:
        assert console("showtables") == ["Tables:", "- people"]

        registry.close()
        assert console("showtables") == ["No tables in the database"]

    def test_describe(self, console: Console) -> None:
        assert console("describe people") == [
            "Table: people",
            "Columns:",
            "0: name (STRING)",
            "1: age (INTEGER)",
        ]

    def test_unknown_table(self, console: Console) -> None:
        assert console("describe nobody") == [
            "Error: Table with name 'nobody' doesn't exist"
        ]

    def test_insert_with_spaces_in_string(self, console: Console, people: Table) -> None:
        assert console('insert people "Carol Ann" 41') == ["Row inserted"]
        assert people.rows[-1].format() == ['"Carol Ann"', "41"]

    def test_insert_wrong_count(self, console: Console, people: Table) -> None:
        lines = console('insert people "Carol"')

        assert len(lines) == 1
        assert lines[0].startswith("Error: ")
        assert people.row_count == 2

    def test_update_and_count(self, console: Console) -> None:
        assert console('update people 0 "Bob" 1 26') == ["Rows updated: 1"]
        assert console("count people 1 26") == ["Count: 1"]

    def test_delete(self, console: Console, people: Table) -> None:
        assert console('delete people 0 "Alice"') == ["Rows deleted: 1"]
        assert people.row_count == 1

    def test_invalid_column_number(self, console: Console) -> None:
        assert console('count people x "Bob"') == ["Error: Invalid column number: x"]

    def test_addcolumn(self, console: Console, people: Table) -> None:
        assert console("addcolumn people email string") == ["Column added: email"]
        assert people.column(2).name == "email"

    def test_addcolumn_unknown_type(self, console: Console, people: Table) -> None:
        lines = console("addcolumn people email TEXT")

        assert lines[0].startswith("Error: ")
        assert people.column_count == 2

    def test_select_prints_matches(self, console: Console) -> None:
        assert console('select 0 "Bob" people') == [
            "0: name (STRING)\t1: age (INTEGER)",
            "----------\t----------",
            '"Bob"\t25',
        ]

    def test_select_without_matches(self, console: Console) -> None:
        assert console('select 0 "Nobody" people') == ["Table is empty"]

    def test_aggregate(self, console: Console) -> None:
        console('insert people "Bob" 5')

        assert console('aggregate people 0 "Bob" 1 sum') == ["Result of sum: 30.0"]
        assert console('aggregate people 0 "Zed" 1 sum') == ["Result of sum: NULL"]

    def test_aggregate_errors(self, console: Console) -> None:
        assert console('aggregate people 0 "Bob" 0 sum')[0].startswith("Error: ")
        assert console('aggregate people 0 "Bob" 1 median') == [
            "Error: Unsupported aggregate operation: median"
        ]

    def test_create_and_rename(self, console: Console, registry: Registry) -> None:
        assert console("create things") == ["Table created: things"]
        assert console("rename things stuff") == [
            "Table renamed from 'things' to 'stuff'"
        ]
        assert registry.table_names() == ["people", "stuff"]

    def test_innerjoin(self, console: Console, registry: Registry, orders: Table) -> None:
        registry.add_table(orders)

        assert console("innerjoin people 0 orders 1") == [
            "Joined table created: people_orders_join"
        ]
        assert registry.get_table("people_orders_join").row_count == 3


@pytest.mark.unit
class TestCatalogCommands:
    """Tests for commands acting on the catalog."""

    def test_save_without_catalog(self, console: Console) -> None:
        assert console("save") == ["Error: No database file specified"]

    def test_saveas_open_close(self, console: Console, registry: Registry, temp_dir: Path) -> None:
        catalog = temp_dir / "shop.db"

        assert console(f"saveas {catalog}") == [f"Database saved as: {catalog}"]
        assert console("close") == ["Database closed"]
        assert len(registry) == 0
        assert console(f"open {catalog}") == [f"Database opened: {catalog}"]
        assert registry.table_names() == ["people"]

    def test_export_and_import(self, console: Console, registry: Registry, temp_dir: Path) -> None:
        target = temp_dir / "copy.tbl"

        assert console(f"export people {target}") == [f"Table exported to: {target}"]
        assert console(f"import {target}") == [f"Table imported from: {target}"]
        assert "copy" in registry

    def test_run_loop(self, registry: Registry, test_config: Config) -> None:
        out = io.StringIO()
        stdin = io.StringIO("create t\nshowtables\nexit\ncreate never\n")

        CommandProcessor(registry, out=out, stdin=stdin, config=test_config).run()

        text = out.getvalue()
        assert text.startswith("Database Management System\n")
        assert "Table created: t" in text
        assert "- t" in text
        assert "never" not in registry
