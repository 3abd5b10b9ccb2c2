"""Application layer for the table store.

Exports:
    - Registry: Catalog-level entry point (open/save/import/export/rename/join)
"""

from tabstore.application.registry import Registry

__all__ = [
    "Registry",
]
