"""Unit tests for FileTableStorage."""

from __future__ import annotations

from pathlib import Path

import pytest

from tabstore.adapters.outbound import FileTableStorage
from tabstore.domain.entities import Table
from tabstore.domain.errors import FormatError, StorageError
from tabstore.infrastructure.config import StorageConfig
from tabstore.infrastructure.metrics import MetricsRegistry
from tabstore.ports.outbound import TableStorage


def sample(metrics: MetricsRegistry, name: str) -> float:
    return metrics._registry.get_sample_value(name) or 0.0


@pytest.mark.unit
class TestFileTableStorage:
    """Tests for FileTableStorage."""

    def test_implements_port(self, storage: FileTableStorage) -> None:
        assert isinstance(storage, TableStorage)

    def test_missing_catalog_is_created(self, storage: FileTableStorage, temp_dir: Path) -> None:
        """A missing catalog is created empty and read as no tables."""
        path = temp_dir / "new" / "catalog.db"

        assert storage.load_catalog(path) == {}
        assert path.exists()
        assert path.read_text() == ""

    def test_missing_catalog_not_created(self, temp_dir: Path, metrics_registry: MetricsRegistry) -> None:
        storage = FileTableStorage(
            StorageConfig(create_missing_catalog=False), metrics_registry
        )

        with pytest.raises(StorageError):
            storage.load_catalog(temp_dir / "catalog.db")

    def test_catalog_round_trip(self, storage: FileTableStorage, temp_dir: Path) -> None:
        path = temp_dir / "catalog.db"
        entries = {"people": "people.tbl", "orders": "/abs/orders.tbl"}

        storage.save_catalog(path, entries)

        assert path.read_text() == "people,people.tbl\norders,/abs/orders.tbl\n"
        assert list(storage.load_catalog(path).items()) == list(entries.items())

    def test_catalog_skips_lines_without_comma(self, storage: FileTableStorage, temp_dir: Path) -> None:
        path = temp_dir / "catalog.db"
        path.write_text("people,people.tbl\njunk\n\norders,o.tbl\n")

        assert storage.load_catalog(path) == {"people": "people.tbl", "orders": "o.tbl"}

    def test_catalog_crlf(self, storage: FileTableStorage, temp_dir: Path) -> None:
        path = temp_dir / "catalog.db"
        path.write_bytes(b"people,people.tbl\r\n")

        assert storage.load_catalog(path) == {"people": "people.tbl"}

    def test_table_round_trip(
        self, storage: FileTableStorage, temp_dir: Path, orders: Table
    ) -> None:
        path = temp_dir / "orders.tbl"

        storage.save_table(orders, path)
        loaded = storage.load_table("orders", path)

        assert loaded.name == "orders"
        assert loaded.columns == orders.columns
        assert [r.format() for r in loaded.rows] == [r.format() for r in orders.rows]

    def test_table_file_layout(
        self, storage: FileTableStorage, temp_dir: Path, people: Table
    ) -> None:
        path = temp_dir / "people.tbl"

        storage.save_table(people, path)

        assert path.read_text() == (
            'name,STRING\nage,INTEGER\n---\n"Alice",30\n"Bob",25\n'
        )

    def test_save_counts_rows_written(
        self,
        storage: FileTableStorage,
        temp_dir: Path,
        people: Table,
        metrics_registry: MetricsRegistry,
    ) -> None:
        storage.save_table(people, temp_dir / "people.tbl")

        assert sample(metrics_registry, "tabstore_rows_written_total") == 2

    def test_skipped_rows_are_counted(
        self,
        storage: FileTableStorage,
        temp_dir: Path,
        metrics_registry: MetricsRegistry,
    ) -> None:
        path = temp_dir / "people.tbl"
        path.write_text('name,STRING\nage,INTEGER\n---\n"Alice",30\n"Bob"\n')

        table = storage.load_table("people", path)

        assert table.row_count == 1
        assert sample(metrics_registry, "tabstore_rows_skipped_total") == 1

    def test_bad_literal_names_file(self, storage: FileTableStorage, temp_dir: Path) -> None:
        path = temp_dir / "bad.tbl"
        path.write_text("x,INTEGER\n---\nabc\n")

        with pytest.raises(FormatError, match="bad.tbl"):
            storage.load_table("bad", path)

    def test_missing_table_file(self, storage: FileTableStorage, temp_dir: Path) -> None:
        with pytest.raises(StorageError):
            storage.load_table("gone", temp_dir / "gone.tbl")

    def test_storage_error_is_os_error(self, storage: FileTableStorage, temp_dir: Path) -> None:
        with pytest.raises(OSError):
            storage.load_table("gone", temp_dir / "gone.tbl")

    def test_undecodable_file(self, storage: FileTableStorage, temp_dir: Path) -> None:
        path = temp_dir / "binary.tbl"
        path.write_bytes(b"x,STRING\n---\n\"\xff\xfe\"\n")

        with pytest.raises(FormatError):
            storage.load_table("binary", path)

    def test_write_into_directory_fails(
        self, storage: FileTableStorage, temp_dir: Path, people: Table
    ) -> None:
        with pytest.raises(StorageError):
            storage.save_table(people, temp_dir)
