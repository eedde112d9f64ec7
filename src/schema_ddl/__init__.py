"""
SchemaDDL - dialect-aware schema to SQL translation.

Turns dialect-neutral table definitions and table diffs into the ordered DDL
statements PostgreSQL, MySQL or SQLite need, and derives deterministic query
result cache keys.
"""

__version__ = "0.1.0"
