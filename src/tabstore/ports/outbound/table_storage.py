"""Table storage port for catalog and table persistence.

This outbound port defines the contract the registry uses to read and
write its catalog and table files. The registry owns path resolution;
implementations receive concrete paths.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import Protocol, runtime_checkable

from tabstore.domain.entities import Table


@runtime_checkable
class TableStorage(Protocol):
    """Protocol for catalog and table file I/O.

    Errors:
        Implementations raise StorageError for I/O failures and
        FormatError for content that cannot be decoded.
    """

    @abstractmethod
    def load_catalog(self, path: Path) -> dict[str, str]:
        """Read a catalog, returning table name -> table file path text.

        A missing catalog is created empty (when configured to) and read
        as an empty mapping.
        """
        ...

    @abstractmethod
    def save_catalog(self, path: Path, table_files: dict[str, str]) -> None:
        """Write a catalog, one entry per table, in mapping order."""
        ...

    @abstractmethod
    def load_table(self, name: str, path: Path) -> Table:
        """Read a table file into a new table called ``name``."""
        ...

    @abstractmethod
    def save_table(self, table: Table, path: Path) -> None:
        """Write a table to a table file, replacing any existing file."""
        ...
