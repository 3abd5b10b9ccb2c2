"""Registry - the catalog-level entry point of the table store.

The Registry owns the set of live tables and the file each one is saved
to, and composes Table with the TableStorage port to open, save, import,
export, rename and join tables.

Usage:
    from tabstore.application import Registry

    registry = Registry()
    registry.open("shop/catalog.db")        # created empty if missing
    people = registry.get_table("people")
    people.insert(['"Alice"', "30"])
    registry.inner_join("people", 0, "orders", 1)
    registry.save()

Path handling:
    Catalog entries keep the path text they were given. A relative table
    path is resolved against the directory of the current catalog file
    (or the working directory while no catalog is set). ``import_table``
    records relative paths as absolute ones so the imported file keeps
    being the one that is saved.

Thread Safety:
    Not thread-safe. The registry and its tables assume a single caller.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from tabstore.adapters.outbound import FileTableStorage
from tabstore.domain.entities import Table
from tabstore.domain.errors import (
    CatalogNotSetError,
    DuplicateTableError,
    TableNotFoundError,
)
from tabstore.domain.services import ensure_encodable, inner_join, join_name
from tabstore.infrastructure.config import Config, get_config
from tabstore.infrastructure.logging import bind_catalog, get_logger
from tabstore.infrastructure.metrics import MetricsRegistry, get_metrics
from tabstore.infrastructure.tracing import trace_span
from tabstore.ports.outbound import TableStorage

logger = get_logger(__name__)


class Registry:
    """Named tables plus their table files and the current catalog path.

    Invariant: the table map and the table file map always have the same
    keys between calls.
    """

    def __init__(
        self,
        storage: TableStorage | None = None,
        config: Config | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize an empty registry.

        Args:
            storage: Storage adapter (default: file storage from config).
            config: Settings (default from global config).
            metrics: Metrics registry (default process-wide registry).
        """
        self._config = config or get_config()
        self._metrics = metrics or get_metrics()
        if storage is None:
            storage = FileTableStorage(self._config.storage, self._metrics)
        self._storage = storage

        self._tables: dict[str, Table] = {}
        self._table_files: dict[str, str] = {}
        self._catalog_path: Path | None = None

    @property
    def catalog_path(self) -> Path | None:
        """The catalog file saved to by save(), if any."""
        return self._catalog_path

    # -- catalog lifecycle ------------------------------------------------

    def open(self, path: str | Path) -> None:
        """Replace the registry contents with a catalog and its tables.

        Everything is loaded into staging maps first; the registry is
        swapped over only if every table loads. On failure the previous
        tables and catalog path are left untouched.

        Raises:
            StorageError: If the catalog or a table file cannot be read.
            FormatError: If a table file holds malformed content.
        """
        catalog = Path(path)
        with self._track("open", catalog=str(catalog)):
            table_files = self._storage.load_catalog(catalog)
            tables = {
                name: self._storage.load_table(name, self._resolve(file, catalog))
                for name, file in table_files.items()
            }

        self._tables = tables
        self._table_files = dict(table_files)
        self._catalog_path = catalog
        self._metrics.tables_loaded.set(len(self._tables))
        bind_catalog(str(catalog))
        logger.info("database_opened", catalog=str(catalog), tables=len(tables))

    def save(self) -> None:
        """Write the catalog and every table file.

        Raises:
            CatalogNotSetError: If no catalog was opened or saved-as yet.
            FormatError: If a STRING value holds a line break; nothing is
                written in that case.
            StorageError: If a file cannot be written.
        """
        if self._catalog_path is None:
            raise CatalogNotSetError("No database file specified")

        catalog = self._catalog_path
        with self._track("save", catalog=str(catalog)):
            for table in self._tables.values():
                ensure_encodable(table)
            self._storage.save_catalog(catalog, self._table_files)
            for name, file in self._table_files.items():
                self._storage.save_table(self._tables[name], self._resolve(file, catalog))

        logger.info("database_saved", catalog=str(catalog), tables=len(self._tables))

    def save_as(self, path: str | Path) -> None:
        """Save to a new catalog file and make it the current one.

        Relative table paths are written next to the new catalog. The
        current catalog path only changes if the save succeeds.
        """
        previous = self._catalog_path
        self._catalog_path = Path(path)
        try:
            self.save()
        except Exception:
            self._catalog_path = previous
            raise
        bind_catalog(str(self._catalog_path))

    def close(self) -> None:
        """Discard all tables and the catalog path without saving."""
        self._tables = {}
        self._table_files = {}
        self._catalog_path = None
        self._metrics.tables_loaded.set(0)
        bind_catalog(None)
        logger.info("database_closed")

    # -- table files ------------------------------------------------------

    def import_table(self, path: str | Path) -> Table:
        """Load a table file and register it under the file's stem.

        ``data/people.tbl`` is registered as ``people``.

        Raises:
            DuplicateTableError: If the name is already registered.
            StorageError: If the file cannot be read.
            FormatError: If the file holds malformed content.
        """
        file = Path(path)
        name = file.stem
        if name in self._tables:
            raise DuplicateTableError(name)

        with self._track("import", table=name, path=str(file)):
            table = self._storage.load_table(name, file)

        stored = file if file.is_absolute() else file.absolute()
        self._register(table, str(stored))
        logger.info("table_imported", table=name, path=str(stored), rows=table.row_count)
        return table

    def export_table(self, name: str, path: str | Path) -> None:
        """Write a table to an arbitrary file; the catalog is unchanged.

        Raises:
            TableNotFoundError: If the table is not registered.
            FormatError: If a STRING value holds a line break; no file is
                written.
            StorageError: If the file cannot be written.
        """
        table = self.get_table(name)
        with self._track("export", table=name, path=str(path)):
            self._storage.save_table(table, Path(path))
        logger.info("table_exported", table=name, path=str(path))

    def table_file(self, name: str) -> str:
        """The catalog path text recorded for a table."""
        self.get_table(name)
        return self._table_files[name]

    # -- tables -----------------------------------------------------------

    def table_names(self) -> list[str]:
        """Registered table names, in registration order."""
        return list(self._tables)

    def get_table(self, name: str) -> Table:
        """Look up a table by name.

        Raises:
            TableNotFoundError: If the table is not registered.
        """
        try:
            return self._tables[name]
        except KeyError:
            raise TableNotFoundError(name) from None

    def add_table(self, table: Table, file: str | None = None) -> Table:
        """Register a table.

        Args:
            table: The table; its name becomes the registry key.
            file: Table file path text (default ``<name><suffix>`` next to
                the catalog).

        Raises:
            DuplicateTableError: If the name is already registered.
        """
        if table.name in self._tables:
            raise DuplicateTableError(table.name)
        if file is None:
            file = f"{table.name}{self._config.storage.table_file_suffix}"
        self._register(table, file)
        return table

    def create_table(self, name: str) -> Table:
        """Register a new empty table with a default table file."""
        return self.add_table(Table(name))

    def rename_table(self, old_name: str, new_name: str) -> None:
        """Rename a table; its table file path moves with it.

        Raises:
            TableNotFoundError: If ``old_name`` is not registered.
            DuplicateTableError: If ``new_name`` is already registered.
        """
        if old_name not in self._tables:
            raise TableNotFoundError(old_name)
        if new_name in self._tables:
            raise DuplicateTableError(new_name)

        table = self._tables.pop(old_name)
        file = self._table_files.pop(old_name)
        table.name = new_name
        self._tables[new_name] = table
        self._table_files[new_name] = file
        logger.info("table_renamed", old=old_name, new=new_name)

    def inner_join(
        self,
        left_name: str,
        left_index: int,
        right_name: str,
        right_index: int,
    ) -> Table:
        """Join two registered tables and register the result.

        The result is named ``"{left}_{right}_join"``. Nothing is registered
        if the join fails.

        Raises:
            TableNotFoundError: If either table is not registered.
            DuplicateTableError: If the result name is already registered.
            ColumnIndexError: On an out-of-range join column access.
        """
        left = self.get_table(left_name)
        right = self.get_table(right_name)
        name = join_name(left.name, right.name)
        if name in self._tables:
            raise DuplicateTableError(name)

        with self._track("join", left=left_name, right=right_name):
            result = inner_join(left, left_index, right, right_index)

        self.add_table(result)
        logger.info("tables_joined", table=name, rows=result.row_count)
        return result

    # -- helpers ----------------------------------------------------------

    def _register(self, table: Table, file: str) -> None:
        self._tables[table.name] = table
        self._table_files[table.name] = file
        self._metrics.tables_loaded.set(len(self._tables))

    def _resolve(self, file: str, catalog: Path | None = None) -> Path:
        path = Path(file)
        catalog = catalog or self._catalog_path
        if path.is_absolute() or catalog is None:
            return path
        return catalog.parent / path

    @contextmanager
    def _track(self, operation: str, **attributes: str) -> Iterator[None]:
        latency = self._metrics.operation_latency_seconds.labels(operation=operation)
        with trace_span(f"registry.{operation}", attributes), latency.time():
            try:
                yield
            except Exception as e:
                self._metrics.operations_total.labels(
                    operation=operation, status="error"
                ).inc()
                logger.warning(f"{operation}_failed", error=str(e), **attributes)
                raise
        self._metrics.operations_total.labels(operation=operation, status="success").inc()

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __len__(self) -> int:
        return len(self._tables)
