"""
Platform engine.

One Platform interprets one Dialect rule set: it quotes identifiers, declares
column types and turns Table and TableDiff models into ordered SQL statement
lists. Every generator either returns complete SQL or raises; nothing is
emitted partially.

Example:
    >>> from schema_ddl.infrastructure.schema import Table
    >>> platform = get_platform("postgresql")
    >>> table = Table("test")
    >>> column = table.add_column("id", "integer", autoincrement=True)
    >>> primary = table.set_primary_key(["id"])
    >>> platform.get_create_table_sql(table)
    ['CREATE TABLE test (id SERIAL NOT NULL, PRIMARY KEY(id))']
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import TYPE_CHECKING, Any, List, Optional, Union

from schema_ddl.config import get_settings
from schema_ddl.infrastructure.schema.asset import (
    Identifier,
    NamedAsset,
    generate_identifier_name,
    quote_names,
)
from schema_ddl.infrastructure.schema.core import (
    NUMERIC_TYPES,
    Column,
    ColumnType,
    ForeignKeyConstraint,
    Index,
    UniqueConstraint,
)
from schema_ddl.utils.logging import get_logger

from .core.identifier import (
    KeywordList,
    quote_identifier,
    quote_single_identifier,
    quote_string_literal,
    requires_quoting,
)
from .core.type_registry import TypeRegistry
from .core.types import TypeDeclarations
from .dialects import Dialect, get_dialect
from .events import ListenerRegistry, SchemaEvent, SchemaEventArgs
from .exceptions import InvalidArgumentError, UnsupportedOperationError

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from schema_ddl.config.settings import Settings
    from schema_ddl.infrastructure.schema.diff import TableDiff
    from schema_ddl.infrastructure.schema.table import Table

logger = get_logger(__name__)

REFERENTIAL_ACTIONS = ("CASCADE", "SET NULL", "NO ACTION", "RESTRICT", "SET DEFAULT")

TRUE_STRINGS = frozenset({"1", "true", "t", "yes", "y", "on"})

TableRef = Union[NamedAsset, str]


class Platform:
    """
    SQL generator for one dialect.

    Args:
        dialect: Rule set to interpret
        settings: Settings instance; defaults to get_settings()
    """

    def __init__(self, dialect: Dialect, settings: Optional["Settings"] = None):
        self.dialect = dialect
        self.settings = settings or get_settings()
        self.types = TypeDeclarations(dialect)
        self.type_registry = TypeRegistry(dialect.name, dialect.type_aliases)
        self.listeners = ListenerRegistry()

    @property
    def name(self) -> str:
        return self.dialect.name

    def __repr__(self) -> str:
        return f"Platform(dialect={self.dialect.name!r})"

    # ------------------------------------------------------------------
    # Identifiers and keywords
    # ------------------------------------------------------------------

    def quote_identifier(self, name: str) -> str:
        """Quote every dot-separated part of a name."""
        return quote_identifier(name, self.dialect.quote_char)

    def quote_single_identifier(self, name: str) -> str:
        return quote_single_identifier(name, self.dialect.quote_char)

    def quote_string_literal(self, value: str) -> str:
        return quote_string_literal(value, self.dialect.escape_backslash_in_literals)

    def is_reserved_keyword(self, word: str) -> bool:
        return self.dialect.keywords.is_keyword(word)

    def get_reserved_keywords_list(self) -> KeywordList:
        return self.dialect.keywords

    def should_quote(self, part: str) -> bool:
        """Whether a bare identifier part must be quoted on this platform."""
        return self.is_reserved_keyword(part) or requires_quoting(
            part, self.dialect.identifier_pattern
        )

    def get_quoted_table_name(self, table: TableRef) -> str:
        if isinstance(table, str):
            return Identifier.parse(table).get_quoted_name(self)
        return table.get_quoted_name(self)

    # ------------------------------------------------------------------
    # Type mappings
    # ------------------------------------------------------------------

    def get_type_mapping(self, alias: str) -> ColumnType:
        return self.type_registry.get(alias)

    def register_type_mapping(self, alias: str, kind: Union[ColumnType, str]) -> None:
        self.type_registry.register(alias, kind)

    def has_type_mapping(self, alias: str) -> bool:
        return self.type_registry.has(alias)

    # ------------------------------------------------------------------
    # Column declarations
    # ------------------------------------------------------------------

    def get_column_type_sql(self, column: Column) -> str:
        return self.types.declare(column.column_type, column.to_options())

    def get_column_declaration_sql(self, name: str, column: Column) -> str:
        """
        Full column declaration: quoted name, type, default, nullability.

        ``column_definition`` replaces everything but the name and, on
        dialects with inline comments, the comment.
        """
        if column.column_definition:
            declaration = column.column_definition
        else:
            declaration = (
                self.get_column_type_sql(column)
                + self._get_column_charset_sql(column)
                + self.get_default_value_declaration_sql(column)
                + (" NOT NULL" if column.notnull else "")
                + self._get_column_collation_sql(column)
            )
        if column.comment and self.dialect.supports_inline_column_comments:
            declaration += " " + self.get_inline_column_comment_sql(column.comment)
        return f"{name} {declaration}"

    def get_default_value_declaration_sql(self, column: Column) -> str:
        """
        Render the DEFAULT clause of a column.

        Numeric and boolean defaults are bare literals; date and time defaults
        equal to the platform's current-time expression stay raw SQL;
        everything else is quoted as a string literal.
        """
        default = column.default
        if default is None:
            return "" if column.notnull else " DEFAULT NULL"

        kind = column.column_type
        if kind in NUMERIC_TYPES:
            return f" DEFAULT {default}"
        if kind is ColumnType.BOOLEAN:
            return f" DEFAULT {self.convert_boolean(default)}"
        if kind in (ColumnType.DATETIME, ColumnType.DATETIMETZ) and (
            default == self.get_current_timestamp_sql()
        ):
            return f" DEFAULT {default}"
        if kind is ColumnType.DATE and default == self.get_current_date_sql():
            return f" DEFAULT {default}"
        if kind is ColumnType.TIME and default == self.get_current_time_sql():
            return f" DEFAULT {default}"
        return f" DEFAULT {self.quote_string_literal(str(default))}"

    def convert_boolean(self, value: Any) -> str:
        if isinstance(value, str):
            value = value.strip().lower() in TRUE_STRINGS
        true_literal, false_literal = self.dialect.boolean_literals
        return true_literal if value else false_literal

    def get_inline_column_comment_sql(self, comment: str) -> str:
        if not self.dialect.supports_inline_column_comments:
            raise UnsupportedOperationError("inline column comment", self.name)
        return f"COMMENT {self.quote_string_literal(comment)}"

    def get_comment_on_column_sql(
        self, table: TableRef, column: Union[Column, str], comment: Optional[str]
    ) -> str:
        """COMMENT ON COLUMN statement; an empty comment clears it."""
        if not self.dialect.supports_comment_on_statement:
            raise UnsupportedOperationError("comment on column", self.name)
        if isinstance(column, str):
            column_name = Identifier.parse(column).get_quoted_name(self)
        else:
            column_name = column.get_quoted_name(self)
        literal = self.quote_string_literal(comment) if comment else "NULL"
        return (
            f"COMMENT ON COLUMN {self.get_quoted_table_name(table)}.{column_name} "
            f"IS {literal}"
        )

    def _get_column_charset_sql(self, column: Column) -> str:
        charset = column.platform_options.get("charset")
        if charset and self.dialect.supports_column_charset:
            return f" CHARACTER SET {charset}"
        return ""

    def _get_column_collation_sql(self, column: Column) -> str:
        collation = column.platform_options.get("collation")
        if collation and self.dialect.supports_column_charset:
            return f" COLLATE {self.quote_single_identifier(collation)}"
        return ""

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def get_create_table_sql(self, table: "Table") -> List[str]:
        """
        Generate the statements creating a table, its indexes and foreign keys.

        Raises:
            InvalidArgumentError: If the table has no columns
        """
        from .operations.create_table import CreateTableBuilder

        if not table.columns:
            raise InvalidArgumentError("Cannot create a table without columns", table.name)
        statements = CreateTableBuilder(self).build(table)
        logger.debug(
            "create_table_sql_generated",
            platform=self.name,
            table=table.get_name(),
            statement_count=len(statements),
        )
        return statements

    def get_alter_table_sql(self, diff: "TableDiff") -> List[str]:
        """
        Generate the statements applying a table diff, in a fixed order.

        An empty diff yields an empty list.
        """
        from .operations.alter_table import AlterTableBuilder

        statements = AlterTableBuilder(self).build(diff)
        logger.debug(
            "alter_table_sql_generated",
            platform=self.name,
            table=diff.get_name(),
            statement_count=len(statements),
        )
        return statements

    def get_table_options_sql(self, table: "Table") -> str:
        """Trailing table options (MySQL charset, collation, engine, comment)."""
        dialect = self.dialect
        options = table.options
        parts = []
        if dialect.supports_table_options:
            charset = options.get("charset", self.settings.mysql_default_charset)
            collation = options.get("collation", self.settings.mysql_default_collation)
            engine = options.get("engine", self.settings.mysql_default_engine)
            if charset:
                parts.append(f"DEFAULT CHARACTER SET {charset}")
            if collation:
                parts.append(f"COLLATE {self.quote_single_identifier(collation)}")
            if engine:
                parts.append(f"ENGINE = {engine}")
        if options.get("comment") and dialect.table_comment_option:
            parts.append(
                dialect.table_comment_option.format(
                    comment=self.quote_string_literal(options["comment"])
                )
            )
        return "".join(f" {part}" for part in parts)

    def get_comment_on_table_sql(self, table: TableRef, comment: Optional[str]) -> str:
        if not self.dialect.table_comment_sql:
            raise UnsupportedOperationError("comment on table", self.name)
        literal = self.quote_string_literal(comment) if comment else "NULL"
        return self.dialect.table_comment_sql.format(
            table=self.get_quoted_table_name(table), comment=literal
        )

    def get_drop_table_sql(self, table: TableRef) -> str:
        """
        DROP TABLE statement, after DROP_TABLE listeners had the chance to
        replace it.
        """
        table_name = self.get_quoted_table_name(table)
        if self.listeners.has_listeners(SchemaEvent.DROP_TABLE):
            args = SchemaEventArgs(
                SchemaEvent.DROP_TABLE,
                self.name,
                table_name,
                table=table if isinstance(table, NamedAsset) else None,
            )
            self.listeners.dispatch(args)
            if args.replacement_sql is not None:
                return args.replacement_sql
        return self.dialect.drop_table_sql.format(table=table_name)

    def get_create_schema_sql(self, schema_name: str) -> str:
        if not self.dialect.create_schema_sql:
            raise UnsupportedOperationError("create schema", self.name, schema_name)
        return self.dialect.create_schema_sql.format(
            name=Identifier.parse(schema_name).get_quoted_name(self)
        )

    def get_truncate_table_sql(self, table: TableRef) -> str:
        return self.dialect.truncate_table_sql.format(
            table=self.get_quoted_table_name(table)
        )

    def get_rename_table_sql(self, table: TableRef, new_name: str) -> str:
        return self.dialect.rename_table_sql.format(
            table=self.get_quoted_table_name(table),
            new=Identifier.parse(new_name).get_quoted_name(self),
        )

    # ------------------------------------------------------------------
    # Indexes and unique constraints
    # ------------------------------------------------------------------

    def get_create_index_sql(self, index: Index, table: TableRef) -> str:
        """
        CREATE INDEX statement for a table.

        The ``where`` predicate is only rendered on dialects with partial
        index support; elsewhere it is dropped.
        """
        if index.is_primary:
            return self.get_create_primary_key_sql(index, table)

        table_name = self.get_quoted_table_name(table)
        columns = ", ".join(quote_names(index.columns, self))
        sql = (
            f"CREATE {self._get_index_flags_sql(index)}INDEX "
            f"{index.get_quoted_name(self)} ON {table_name} ({columns})"
        )
        if index.where:
            if self.dialect.supports_partial_indexes:
                sql += f" WHERE {index.where}"
            else:
                logger.debug(
                    "partial_index_predicate_dropped",
                    platform=self.name,
                    index=index.get_name(),
                )
        return sql

    def get_create_primary_key_sql(self, index: Index, table: TableRef) -> str:
        if not self.dialect.add_primary_key_sql:
            raise UnsupportedOperationError("add primary key", self.name)
        return self.dialect.add_primary_key_sql.format(
            table=self.get_quoted_table_name(table),
            columns=", ".join(quote_names(index.columns, self)),
        )

    def get_create_unique_constraint_sql(
        self, constraint: UniqueConstraint, table: TableRef
    ) -> str:
        """Add a unique constraint; falls back to a unique index."""
        columns = ", ".join(quote_names(constraint.columns, self))
        if not self.dialect.add_unique_constraint_sql:
            return self.get_create_index_sql(
                Index(constraint.name, constraint.columns, is_unique=True), table
            )
        return self.dialect.add_unique_constraint_sql.format(
            table=self.get_quoted_table_name(table),
            name=constraint.get_quoted_name(self),
            columns=columns,
        )

    def get_drop_index_sql(self, index: Union[Index, str], table: TableRef) -> str:
        """
        DROP INDEX statement.

        Where index names live in the table's schema, the table's schema
        prefix is carried over to the index name.
        """
        dialect = self.dialect
        index_name = self._get_index_name(index)
        table_name = self.get_quoted_table_name(table)
        if dialect.schema_qualified_index_names:
            index_name = self._with_schema_prefix(index_name, table)
        return dialect.drop_index_sql.format(index=index_name, table=table_name)

    def get_rename_index_sql(
        self, old_name: str, index: Index, table: TableRef
    ) -> List[str]:
        """Native index rename, or DROP of the old name plus CREATE of the new."""
        dialect = self.dialect
        if not dialect.rename_index_sql:
            return [
                self.get_drop_index_sql(old_name, table),
                self.get_create_index_sql(index, table),
            ]
        old = self._get_index_name(old_name)
        if dialect.schema_qualified_index_names:
            old = self._with_schema_prefix(old, table)
        return [
            dialect.rename_index_sql.format(
                table=self.get_quoted_table_name(table),
                old=old,
                new=index.get_quoted_name(self),
            )
        ]

    def get_drop_unique_constraint_sql(
        self, constraint: Union[UniqueConstraint, str], table: TableRef
    ) -> str:
        if not self.dialect.drop_unique_constraint_sql:
            return self.get_drop_index_sql(self._get_index_name(constraint), table)
        return self.dialect.drop_unique_constraint_sql.format(
            table=self.get_quoted_table_name(table),
            name=self._get_index_name(constraint),
        )

    def get_drop_primary_key_sql(self, table: TableRef) -> str:
        if not self.dialect.drop_primary_key_sql:
            raise UnsupportedOperationError("drop primary key", self.name)
        identifier = _as_identifier(table)
        constraint = Identifier(f"{identifier.short_name}_pkey", identifier.quoted)
        return self.dialect.drop_primary_key_sql.format(
            table=self.get_quoted_table_name(table),
            constraint=constraint.get_quoted_name(self),
        )

    def get_unique_constraint_declaration_sql(self, constraint: UniqueConstraint) -> str:
        if not constraint.columns:
            raise InvalidArgumentError(
                "Unique constraint must have at least one column", constraint.name
            )
        columns = ", ".join(quote_names(constraint.columns, self))
        return f"CONSTRAINT {constraint.get_quoted_name(self)} UNIQUE ({columns})"

    def get_index_declaration_sql(self, index: Index) -> str:
        """Inline index declaration inside CREATE TABLE."""
        if not self.dialect.supports_inline_index_declaration:
            raise UnsupportedOperationError("inline index declaration", self.name)
        columns = ", ".join(quote_names(index.columns, self))
        return (
            f"{self._get_index_flags_sql(index)}INDEX "
            f"{index.get_quoted_name(self)} ({columns})"
        )

    def _get_index_flags_sql(self, index: Index) -> str:
        flags = ""
        if index.is_unique:
            flags = "UNIQUE "
        for flag in sorted(self.dialect.index_flags):
            if index.has_flag(flag):
                flags += f"{flag.upper()} "
        return flags

    def _get_index_name(self, index: Union[NamedAsset, str]) -> str:
        if isinstance(index, str):
            return Identifier.parse(index).get_quoted_name(self)
        return index.get_quoted_name(self)

    def _with_schema_prefix(self, index_name: str, table: TableRef) -> str:
        if _as_identifier(table).namespace is None:
            return index_name
        schema = self.get_quoted_table_name(table).split(".", 1)[0]
        return f"{schema}.{index_name}"

    # ------------------------------------------------------------------
    # Foreign keys
    # ------------------------------------------------------------------

    def get_foreign_key_declaration_sql(self, foreign_key: ForeignKeyConstraint) -> str:
        """
        Foreign key constraint declaration.

        Example output:
            CONSTRAINT fk_name FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE
        """
        if not foreign_key.local_columns or not foreign_key.foreign_columns:
            raise InvalidArgumentError(
                "Foreign key requires local and foreign columns", foreign_key.name
            )
        if not foreign_key.foreign_table_name:
            raise InvalidArgumentError("Foreign key requires a foreign table", foreign_key.name)

        sql = ""
        if foreign_key.name:
            sql = f"CONSTRAINT {foreign_key.get_quoted_name(self)} "
        sql += (
            f"FOREIGN KEY ({', '.join(quote_names(foreign_key.local_columns, self))}) "
            f"REFERENCES {foreign_key.foreign_table.get_quoted_name(self)} "
            f"({', '.join(quote_names(foreign_key.foreign_columns, self))})"
        )
        return sql + self.get_advanced_foreign_key_options_sql(foreign_key)

    def get_advanced_foreign_key_options_sql(self, foreign_key: ForeignKeyConstraint) -> str:
        sql = ""
        if foreign_key.on_delete:
            sql += " ON DELETE " + self.get_foreign_key_referential_action_sql(
                foreign_key.on_delete
            )
        if foreign_key.on_update:
            sql += " ON UPDATE " + self.get_foreign_key_referential_action_sql(
                foreign_key.on_update
            )
        options = foreign_key.options
        if self.dialect.supports_deferrable_constraints:
            if "deferrable" in options:
                sql += " DEFERRABLE" if options["deferrable"] else " NOT DEFERRABLE"
            if "deferred" in options:
                sql += " INITIALLY DEFERRED" if options["deferred"] else " INITIALLY IMMEDIATE"
        return sql

    def get_foreign_key_referential_action_sql(self, action: str) -> str:
        """
        Canonical referential action.

        Raises:
            InvalidArgumentError: If the action is not one of CASCADE, SET NULL,
                NO ACTION, RESTRICT or SET DEFAULT
        """
        upper = str(action).strip().upper()
        if upper not in REFERENTIAL_ACTIONS:
            raise InvalidArgumentError("Invalid foreign key referential action", action)
        return upper

    def get_create_foreign_key_sql(
        self, foreign_key: ForeignKeyConstraint, table: TableRef
    ) -> str:
        """ALTER TABLE ... ADD CONSTRAINT; unnamed keys get a generated name."""
        if not self.dialect.supports_foreign_key_constraints:
            raise UnsupportedOperationError(
                "create foreign key",
                self.name,
                "Foreign keys must be declared in CREATE TABLE.",
            )
        if not foreign_key.name:
            foreign_key = replace(
                foreign_key,
                name=generate_identifier_name(
                    [_as_identifier(table).name, *foreign_key.local_columns],
                    "fk",
                    self.settings.max_identifier_length,
                ),
            )
        return (
            f"ALTER TABLE {self.get_quoted_table_name(table)} "
            f"ADD {self.get_foreign_key_declaration_sql(foreign_key)}"
        )

    def get_drop_foreign_key_sql(
        self, foreign_key: Union[ForeignKeyConstraint, str], table: TableRef
    ) -> str:
        if not self.dialect.drop_foreign_key_sql:
            raise UnsupportedOperationError("drop foreign key", self.name)
        if isinstance(foreign_key, ForeignKeyConstraint) and not foreign_key.name:
            raise InvalidArgumentError("Cannot drop an unnamed foreign key")
        return self.dialect.drop_foreign_key_sql.format(
            table=self.get_quoted_table_name(table),
            name=self._get_index_name(foreign_key),
        )

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def get_current_timestamp_sql(self) -> str:
        return self.dialect.current_timestamp_sql

    def get_current_date_sql(self) -> str:
        return self.dialect.current_date_sql

    def get_current_time_sql(self) -> str:
        return self.dialect.current_time_sql

    def get_bit_and_comparison_expression(self, value1: Any, value2: Any) -> str:
        return self.dialect.bit_and_sql.format(left=value1, right=value2)

    def get_bit_or_comparison_expression(self, value1: Any, value2: Any) -> str:
        return self.dialect.bit_or_sql.format(left=value1, right=value2)

    def escape_string_for_like(self, value: str, escape_char: str) -> str:
        """
        Escape LIKE wildcards and the escape character itself.

        Example:
            >>> platform.escape_string_for_like("25% off_", "!")
            '25!% off!_'
        """
        special = re.escape(self.dialect.like_wildcard_characters + escape_char)
        return re.sub(f"([{special}])", lambda match: escape_char + match.group(1), value)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def modify_limit_query(
        self, query: str, limit: Optional[int] = None, offset: int = 0
    ) -> str:
        """
        Append LIMIT and OFFSET clauses to a SELECT query.

        A query without a limit and with a zero offset is returned unchanged.
        """
        if offset < 0:
            raise InvalidArgumentError("Offset must be a positive integer or zero", offset)
        if limit is not None and limit < 0:
            raise InvalidArgumentError("Limit must be a positive integer or zero", limit)
        if limit is not None:
            query += f" LIMIT {limit}"
        elif offset > 0 and self.dialect.unbounded_limit:
            query += f" LIMIT {self.dialect.unbounded_limit}"
        if offset > 0:
            query += f" OFFSET {offset}"
        return query


def _as_identifier(table: TableRef) -> Identifier:
    if isinstance(table, str):
        return Identifier.parse(table)
    return table.identifier


def get_platform(name: Optional[str] = None, settings: Optional["Settings"] = None) -> Platform:
    """
    Build a Platform for a dialect name.

    Args:
        name: Dialect name; defaults to the configured default dialect
        settings: Settings instance; defaults to get_settings()
    """
    settings = settings or get_settings()
    return Platform(get_dialect(name or settings.default_dialect), settings)


__all__ = ["Platform", "get_platform", "REFERENTIAL_ACTIONS"]
