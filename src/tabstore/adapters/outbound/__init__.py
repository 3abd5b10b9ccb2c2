"""Outbound adapters - implementations of outbound ports."""

from tabstore.adapters.outbound.file_table_storage import FileTableStorage

__all__ = [
    "FileTableStorage",
]
