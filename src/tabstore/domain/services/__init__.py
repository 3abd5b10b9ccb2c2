"""Domain services for the table store.

Exports:
    Join:
        - inner_join: Nested-loop equi-join of two tables
        - join_name: Name given to a join result

    Line codec:
        - split_fields: Quote-aware field tokenizer
        - encode_table / decode_table: Table file lines
        - ensure_encodable: Rejects values that do not fit on one line
        - format_catalog_entry / parse_catalog_entry: Catalog file lines
"""

from tabstore.domain.services.join import inner_join, join_name
from tabstore.domain.services.line_codec import (
    SECTION_SEPARATOR,
    DecodedTable,
    decode_table,
    encode_table,
    ensure_encodable,
    format_catalog_entry,
    format_column,
    format_row,
    parse_catalog_entry,
    parse_column,
    parse_row,
    split_fields,
)

__all__ = [
    # Join
    "inner_join",
    "join_name",
    # Line codec
    "SECTION_SEPARATOR",
    "DecodedTable",
    "decode_table",
    "encode_table",
    "ensure_encodable",
    "format_catalog_entry",
    "format_column",
    "format_row",
    "parse_catalog_entry",
    "parse_column",
    "parse_row",
    "split_fields",
]
