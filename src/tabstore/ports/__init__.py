"""Ports layer - interface definitions following Hexagonal Architecture.

Outbound ports are dependencies on external systems (the file system);
adapters implement them with concrete functionality.
"""

from tabstore.ports.outbound import TableStorage

__all__ = [
    "TableStorage",
]
