"""
tabstore - File-backed tabular data store

A single-user table store that keeps typed tables in memory, persists them
to a line-oriented catalog plus one text file per table, and answers a
fixed vocabulary of relational-style queries.
"""

__version__ = "0.1.0"
