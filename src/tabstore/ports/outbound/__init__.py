"""Outbound ports - interfaces for external dependencies."""

from tabstore.ports.outbound.table_storage import TableStorage

__all__ = [
    "TableStorage",
]
