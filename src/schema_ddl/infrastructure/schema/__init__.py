"""
Dialect-neutral schema model.

Tables, columns, indexes and constraints describe what should exist; table
diffs describe how an existing table should change.
"""

from .asset import Identifier, NamedAsset, generate_identifier_name, quote_names
from .core import (
    Column,
    ColumnType,
    ForeignKeyConstraint,
    Index,
    UniqueConstraint,
)
from .diff import ColumnDiff, TableDiff
from .loader import (
    SchemaDefinitionError,
    load_table,
    load_table_diff,
    table_diff_from_dict,
    table_from_dict,
)
from .table import Table

__all__ = [
    "Identifier",
    "NamedAsset",
    "generate_identifier_name",
    "quote_names",
    "Column",
    "ColumnType",
    "ForeignKeyConstraint",
    "Index",
    "UniqueConstraint",
    "ColumnDiff",
    "TableDiff",
    "Table",
    "SchemaDefinitionError",
    "load_table",
    "load_table_diff",
    "table_from_dict",
    "table_diff_from_dict",
]
