"""Inbound adapters - the interactive command loop and table printer."""

from tabstore.adapters.inbound.command_processor import CommandProcessor
from tabstore.adapters.inbound.table_printer import TablePrinter

__all__ = [
    "CommandProcessor",
    "TablePrinter",
]
