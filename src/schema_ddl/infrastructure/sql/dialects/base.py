"""
Dialect rule set definition.

A Dialect is pure data: capability flags, keyword lists, type keyword tables
and statement templates. One shared Platform engine interprets it, so adding
a dialect means adding a Dialect instance, not new control flow.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Pattern, Tuple

from schema_ddl.infrastructure.schema.core import ColumnType
from schema_ddl.infrastructure.sql.core.identifier import (
    DEFAULT_IDENTIFIER_PATTERN,
    KeywordList,
)

# Column alteration styles
GRANULAR = "granular"  # one ALTER clause per changed attribute
REDEFINE = "redefine"  # restate the whole column definition


@dataclass(frozen=True)
class Dialect:
    """Capability flags and lookup tables describing one SQL dialect."""

    name: str
    quote_char: str
    keywords: KeywordList
    type_keywords: Dict[ColumnType, str]
    identifier_pattern: Pattern[str] = DEFAULT_IDENTIFIER_PATTERN

    # Capabilities
    supports_partial_indexes: bool = False
    supports_inline_index_declaration: bool = False
    supports_foreign_key_constraints: bool = True
    inline_foreign_keys: bool = False
    supports_comment_on_statement: bool = False
    supports_inline_column_comments: bool = False
    supports_column_charset: bool = False
    supports_deferrable_constraints: bool = False
    supports_unsigned: bool = False
    supports_table_options: bool = False
    index_flags: FrozenSet[str] = frozenset()
    combined_alter_table: bool = False
    escape_backslash_in_literals: bool = False
    column_alteration: Optional[str] = GRANULAR

    # Type declarations
    string_keywords: Tuple[str, str] = ("CHAR", "VARCHAR")
    binary_keywords: Tuple[str, str] = ("BINARY", "VARBINARY")
    binary_has_length: bool = True
    default_string_length: Optional[int] = None
    text_keywords_by_length: Tuple[Tuple[int, str], ...] = ()
    blob_keywords_by_length: Tuple[Tuple[int, str], ...] = ()
    autoincrement_keywords: Dict[ColumnType, str] = field(default_factory=dict)
    autoincrement_suffix: Optional[str] = None
    inline_autoincrement_primary_key: Optional[str] = None
    boolean_literals: Tuple[str, str] = ("true", "false")
    current_timestamp_sql: str = "CURRENT_TIMESTAMP"
    current_date_sql: str = "CURRENT_DATE"
    current_time_sql: str = "CURRENT_TIME"
    like_wildcard_characters: str = "%_"
    bit_and_sql: str = "({left} & {right})"
    bit_or_sql: str = "({left} | {right})"
    # LIMIT value meaning "no limit" when only an offset is given
    unbounded_limit: Optional[str] = None

    # Statement templates
    create_schema_sql: Optional[str] = None
    drop_table_sql: str = "DROP TABLE {table}"
    truncate_table_sql: str = "TRUNCATE {table}"
    rename_table_sql: str = "ALTER TABLE {table} RENAME TO {new}"
    add_column_clause: str = "ADD {declaration}"
    drop_column_clause: str = "DROP {column}"
    rename_column_clause: str = "RENAME COLUMN {old} TO {new}"
    change_column_clause: Optional[str] = None
    drop_index_sql: str = "DROP INDEX {index}"
    schema_qualified_index_names: bool = True
    rename_index_sql: Optional[str] = None
    drop_foreign_key_sql: Optional[str] = "ALTER TABLE {table} DROP CONSTRAINT {name}"
    add_unique_constraint_sql: Optional[str] = (
        "ALTER TABLE {table} ADD CONSTRAINT {name} UNIQUE ({columns})"
    )
    drop_unique_constraint_sql: Optional[str] = "ALTER TABLE {table} DROP CONSTRAINT {name}"
    add_primary_key_sql: Optional[str] = "ALTER TABLE {table} ADD PRIMARY KEY ({columns})"
    drop_primary_key_sql: Optional[str] = None
    autoincrement_enable_statements: Tuple[str, ...] = ()
    autoincrement_enable_clause: Optional[str] = None
    autoincrement_disable_clause: Optional[str] = None
    table_comment_sql: Optional[str] = None
    table_comment_option: Optional[str] = None

    # Built-in database type aliases for the type registry
    type_aliases: Dict[str, ColumnType] = field(default_factory=dict)


__all__ = ["Dialect", "GRANULAR", "REDEFINE"]
