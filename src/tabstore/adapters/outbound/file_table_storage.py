"""File-based table storage adapter.

Implements the TableStorage port with plain text files: a catalog file of
``name,path`` lines and one table file per table (see
``tabstore.domain.services.line_codec`` for the formats).

Files are read with universal newlines and written with ``\\n`` line
endings in the configured encoding. Table files are rewritten in full on
every save.

Thread Safety:
    None. Callers serialize access (the registry is single-user).
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from tabstore.domain.entities import Table
from tabstore.domain.errors import FormatError, StorageError
from tabstore.domain.services import (
    decode_table,
    encode_table,
    format_catalog_entry,
    parse_catalog_entry,
)
from tabstore.infrastructure.config import StorageConfig, get_config
from tabstore.infrastructure.logging import get_logger
from tabstore.infrastructure.metrics import MetricsRegistry, get_metrics

logger = get_logger(__name__)


class FileTableStorage:
    """File-based implementation of the TableStorage protocol.

    Attributes:
        encoding: Text encoding used for every file.
    """

    def __init__(
        self,
        config: StorageConfig | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the storage adapter.

        Args:
            config: Storage settings (default from global config).
            metrics: Metrics registry (default process-wide registry).
        """
        self._config = config or get_config().storage
        self._metrics = metrics or get_metrics()

    @property
    def encoding(self) -> str:
        return self._config.encoding

    # -- catalog ----------------------------------------------------------

    def load_catalog(self, path: Path) -> dict[str, str]:
        """Read a catalog file.

        Lines without a comma are ignored; a repeated name keeps its last
        path.

        Raises:
            StorageError: If the file cannot be read or created.
        """
        path = Path(path)
        if not path.exists():
            if not self._config.create_missing_catalog:
                raise StorageError(f"Catalog file not found: {path}")
            self._create_empty(path)
            logger.info("catalog_created", path=str(path))
            return {}

        table_files: dict[str, str] = {}
        for _, line in self._read_lines(path):
            entry = parse_catalog_entry(line)
            if entry is not None:
                name, table_path = entry
                table_files[name] = table_path
        return table_files

    def save_catalog(self, path: Path, table_files: dict[str, str]) -> None:
        """Write a catalog file.

        Raises:
            StorageError: If the file cannot be written.
        """
        lines = [format_catalog_entry(name, p) for name, p in table_files.items()]
        self._write_lines(Path(path), lines)

    # -- tables -----------------------------------------------------------

    def load_table(self, name: str, path: Path) -> Table:
        """Read a table file.

        Data lines with the wrong number of fields are skipped and logged.

        Raises:
            StorageError: If the file cannot be read.
            FormatError: On an unknown column type or malformed literal.
        """
        path = Path(path)
        lines = [line for _, line in self._read_lines(path)]
        try:
            decoded = decode_table(name, lines)
        except FormatError as e:
            raise FormatError(f"{path}: {e}") from e

        if decoded.skipped_lines:
            self._metrics.rows_skipped_total.inc(len(decoded.skipped_lines))
            logger.warning(
                "malformed_rows_skipped",
                table=name,
                path=str(path),
                lines=decoded.skipped_lines,
            )
        return decoded.table

    def save_table(self, table: Table, path: Path) -> None:
        """Write a table file.

        Raises:
            StorageError: If the file cannot be written.
        """
        self._write_lines(Path(path), encode_table(table))
        self._metrics.rows_written_total.inc(table.row_count)

    # -- file helpers -----------------------------------------------------

    def _read_lines(self, path: Path) -> Iterator[tuple[int, str]]:
        try:
            with open(path, "r", encoding=self.encoding) as f:
                lines = f.read().split("\n")
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e.strerror or e}") from e
        except UnicodeDecodeError as e:
            raise FormatError(f"{path} is not valid {self.encoding} text: {e}") from e

        # A trailing newline does not start another line
        if lines and lines[-1] == "":
            lines.pop()
        return enumerate(lines, start=1)

    def _write_lines(self, path: Path, lines: list[str]) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding=self.encoding, newline="\n") as f:
                for line in lines:
                    f.write(line)
                    f.write("\n")
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e.strerror or e}") from e

    def _create_empty(self, path: Path) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
        except OSError as e:
            raise StorageError(f"Cannot create {path}: {e.strerror or e}") from e
