"""Adapters layer - concrete implementations of port interfaces.

Adapters provide the actual implementations:
- Inbound adapters: Handle incoming requests (interactive command loop)
- Outbound adapters: Implement external dependencies (table files)
"""

from tabstore.adapters.outbound import FileTableStorage

__all__ = [
    # Outbound adapters
    "FileTableStorage",
]
