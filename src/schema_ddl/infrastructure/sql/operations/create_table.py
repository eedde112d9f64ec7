"""
CREATE TABLE statement builder.

Assembles the CREATE TABLE body (columns, unique constraints, inline indexes,
primary key, inline foreign keys, table options) followed by the statements a
dialect needs outside of the body.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from schema_ddl.infrastructure.schema.asset import Identifier, quote_names
from schema_ddl.infrastructure.schema.core import INTEGER_TYPES
from schema_ddl.infrastructure.sql.events import SchemaEvent, SchemaEventArgs
from schema_ddl.infrastructure.sql.exceptions import UnsupportedOperationError

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from schema_ddl.infrastructure.schema.table import Table
    from schema_ddl.infrastructure.sql.platform import Platform


class CreateTableBuilder:
    """
    Builder for the statements creating one table.

    Statement order:
        1. CREATE TABLE with the table body
        2. CREATE INDEX for indexes the dialect cannot declare inline
        3. SQL appended by CREATE_TABLE and CREATE_TABLE_COLUMN listeners
        4. Column and table comments, on dialects using COMMENT ON
        5. Foreign keys, on dialects that add them with ALTER TABLE

    Example:
        >>> builder = CreateTableBuilder(get_platform("sqlite"))
        >>> builder.build(table)
        ['CREATE TABLE test (id INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL)']
    """

    def __init__(self, platform: "Platform"):
        self.platform = platform

    def build(self, table: "Table") -> List[str]:
        platform = self.platform
        dialect = platform.dialect
        table_name = table.get_quoted_name(platform)
        inline_primary_key = self._has_inline_primary_key(table)

        listener_sql: List[str] = []
        if platform.listeners.has_listeners(SchemaEvent.CREATE_TABLE):
            listener_sql.extend(
                platform.listeners.dispatch(
                    SchemaEventArgs(
                        SchemaEvent.CREATE_TABLE, platform.name, table_name, table=table
                    )
                )
            )

        body: List[str] = []
        for column in table.get_columns():
            if platform.listeners.has_listeners(SchemaEvent.CREATE_TABLE_COLUMN):
                listener_sql.extend(
                    platform.listeners.dispatch(
                        SchemaEventArgs(
                            SchemaEvent.CREATE_TABLE_COLUMN,
                            platform.name,
                            table_name,
                            table=table,
                            column=column,
                        )
                    )
                )
            body.append(
                platform.get_column_declaration_sql(column.get_quoted_name(platform), column)
            )

        for constraint in table.get_unique_constraints():
            body.append(platform.get_unique_constraint_declaration_sql(constraint))

        if dialect.supports_inline_index_declaration:
            for index in table.indexes.values():
                body.append(platform.get_index_declaration_sql(index))

        if table.primary_key is not None and not inline_primary_key:
            columns = ", ".join(quote_names(table.primary_key.columns, platform))
            body.append(f"PRIMARY KEY({columns})")

        if dialect.inline_foreign_keys:
            for foreign_key in table.get_foreign_keys():
                body.append(platform.get_foreign_key_declaration_sql(foreign_key))

        statements = [
            f"CREATE TABLE {table_name} ({', '.join(body)})"
            + platform.get_table_options_sql(table)
        ]

        if not dialect.supports_inline_index_declaration:
            for index in table.indexes.values():
                statements.append(platform.get_create_index_sql(index, table))

        statements.extend(listener_sql)

        if dialect.supports_comment_on_statement:
            for column in table.get_columns():
                if column.comment:
                    statements.append(
                        platform.get_comment_on_column_sql(table, column, column.comment)
                    )
        if table.options.get("comment") and dialect.table_comment_sql:
            statements.append(
                platform.get_comment_on_table_sql(table, table.options["comment"])
            )

        if not dialect.inline_foreign_keys and dialect.supports_foreign_key_constraints:
            for foreign_key in table.get_foreign_keys():
                statements.append(platform.get_create_foreign_key_sql(foreign_key, table))

        return statements

    def _has_inline_primary_key(self, table: "Table") -> bool:
        """
        SQLite declares autoincrement keys as INTEGER PRIMARY KEY on the column.

        AUTOINCREMENT is only valid there, so the column must be the whole
        primary key of the table.
        """
        if not self.platform.dialect.inline_autoincrement_primary_key:
            return False
        autoincrement_columns = [
            column
            for column in table.get_columns()
            if column.autoincrement and column.column_type in INTEGER_TYPES
        ]
        if not autoincrement_columns:
            return False
        key_columns = (
            [Identifier.parse(name).key for name in table.primary_key.columns]
            if table.primary_key is not None
            else []
        )
        for column in autoincrement_columns:
            if key_columns != [column.identifier.key]:
                raise UnsupportedOperationError(
                    "autoincrement column outside a single-column primary key",
                    self.platform.name,
                    f"Column '{column.get_name()}' must be the only primary key column.",
                )
        return True


__all__ = ["CreateTableBuilder"]
