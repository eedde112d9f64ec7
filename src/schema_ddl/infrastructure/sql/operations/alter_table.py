"""
ALTER TABLE statement builder.

Turns a TableDiff into statements in a fixed order:

    1. drop removed and changed foreign keys
    2. drop removed and changed indexes, then unique constraints
    3. drop removed columns
    4. rename columns
    5. add columns
    6. alter changed columns
    7. create added and changed indexes, then unique constraints
    8. rename indexes
    9. add added and changed foreign keys
   10. rename the table

Steps 1 to 9 address the table by its old name. Column work (steps 3 to 6)
is collected as ALTER TABLE clauses plus standalone statements; dialects with
combined_alter_table merge the clauses into one ALTER TABLE.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

from schema_ddl.infrastructure.schema.asset import Identifier
from schema_ddl.infrastructure.schema.diff import ColumnDiff, TableDiff
from schema_ddl.infrastructure.sql.dialects.base import GRANULAR, REDEFINE
from schema_ddl.infrastructure.sql.events import SchemaEvent, SchemaEventArgs
from schema_ddl.infrastructure.sql.exceptions import UnsupportedOperationError

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from schema_ddl.infrastructure.sql.platform import Platform

CLAUSE = "clause"
STATEMENT = "statement"

AlterItem = Tuple[str, str]


class AlterTableBuilder:
    """Builder for the statements applying one TableDiff."""

    def __init__(self, platform: "Platform"):
        self.platform = platform

    def build(self, diff: TableDiff) -> List[str]:
        diff.validate()
        if diff.is_empty():
            return []

        platform = self.platform
        table_name = diff.get_quoted_name(platform)
        statements: List[str] = []

        statements.extend(self._drop_foreign_keys(diff))
        statements.extend(self._drop_indexes(diff))

        items: List[AlterItem] = []
        listener_sql: List[str] = []
        items.extend(self._remove_columns(diff, table_name, listener_sql))
        items.extend(self._rename_columns(diff, table_name, listener_sql))
        items.extend(self._add_columns(diff, table_name, listener_sql))
        items.extend(self._change_columns(diff, table_name, listener_sql))
        statements.extend(self._render_items(table_name, items))
        statements.extend(listener_sql)

        statements.extend(self._create_indexes(diff))
        for old_name, index in diff.renamed_indexes.items():
            statements.extend(platform.get_rename_index_sql(old_name, index, diff))
        for foreign_key in [*diff.added_foreign_keys, *diff.changed_foreign_keys]:
            statements.append(platform.get_create_foreign_key_sql(foreign_key, diff))

        if diff.new_name:
            statements.append(platform.get_rename_table_sql(diff, diff.new_name))

        if platform.listeners.has_listeners(SchemaEvent.ALTER_TABLE):
            statements.extend(
                platform.listeners.dispatch(
                    SchemaEventArgs(
                        SchemaEvent.ALTER_TABLE, platform.name, table_name, table_diff=diff
                    )
                )
            )
        return statements

    # ------------------------------------------------------------------
    # Constraints and indexes
    # ------------------------------------------------------------------

    def _drop_foreign_keys(self, diff: TableDiff) -> List[str]:
        return [
            self.platform.get_drop_foreign_key_sql(foreign_key, diff)
            for foreign_key in [*diff.removed_foreign_keys, *diff.changed_foreign_keys]
        ]

    def _drop_indexes(self, diff: TableDiff) -> List[str]:
        platform = self.platform
        rename_sources = {Identifier.parse(name).key for name in diff.renamed_indexes}
        statements = []
        for name, index in diff.removed_indexes.items():
            if Identifier.parse(name).key in rename_sources:
                continue
            statements.append(self._drop_index(index, diff))
        for index in diff.changed_indexes.values():
            statements.append(self._drop_index(index, diff))
        for constraint in [
            *diff.removed_unique_constraints.values(),
            *diff.changed_unique_constraints.values(),
        ]:
            statements.append(platform.get_drop_unique_constraint_sql(constraint, diff))
        return statements

    def _drop_index(self, index, diff: TableDiff) -> str:
        if index.is_primary:
            return self.platform.get_drop_primary_key_sql(diff)
        return self.platform.get_drop_index_sql(index, diff)

    def _create_indexes(self, diff: TableDiff) -> List[str]:
        platform = self.platform
        statements = [
            platform.get_create_index_sql(index, diff)
            for index in [*diff.added_indexes.values(), *diff.changed_indexes.values()]
        ]
        statements.extend(
            platform.get_create_unique_constraint_sql(constraint, diff)
            for constraint in [
                *diff.added_unique_constraints.values(),
                *diff.changed_unique_constraints.values(),
            ]
        )
        return statements

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def _remove_columns(
        self, diff: TableDiff, table_name: str, listener_sql: List[str]
    ) -> List[AlterItem]:
        platform = self.platform
        items = []
        for column in diff.removed_columns.values():
            listener_sql.extend(
                self._dispatch(
                    SchemaEvent.ALTER_TABLE_REMOVE_COLUMN, table_name, diff, column=column
                )
            )
            items.append(
                (
                    CLAUSE,
                    platform.dialect.drop_column_clause.format(
                        column=column.get_quoted_name(platform)
                    ),
                )
            )
        return items

    def _rename_columns(
        self, diff: TableDiff, table_name: str, listener_sql: List[str]
    ) -> List[AlterItem]:
        platform = self.platform
        items = []
        for old_name, column in diff.renamed_columns.items():
            listener_sql.extend(
                self._dispatch(
                    SchemaEvent.ALTER_TABLE_RENAME_COLUMN,
                    table_name,
                    diff,
                    column=column,
                    old_column_name=old_name,
                )
            )
            items.append((CLAUSE, self._rename_clause(old_name, column)))
        return items

    def _add_columns(
        self, diff: TableDiff, table_name: str, listener_sql: List[str]
    ) -> List[AlterItem]:
        platform = self.platform
        items = []
        comments = []
        for column in diff.added_columns.values():
            listener_sql.extend(
                self._dispatch(
                    SchemaEvent.ALTER_TABLE_ADD_COLUMN, table_name, diff, column=column
                )
            )
            declaration = platform.get_column_declaration_sql(
                column.get_quoted_name(platform), column
            )
            items.append(
                (CLAUSE, platform.dialect.add_column_clause.format(declaration=declaration))
            )
            if column.comment and platform.dialect.supports_comment_on_statement:
                comments.append(
                    (STATEMENT, platform.get_comment_on_column_sql(diff, column, column.comment))
                )
        return items + comments

    def _change_columns(
        self, diff: TableDiff, table_name: str, listener_sql: List[str]
    ) -> List[AlterItem]:
        platform = self.platform
        alteration = platform.dialect.column_alteration
        items: List[AlterItem] = []
        for column_diff in diff.changed_columns.values():
            if not column_diff.changed_properties and not column_diff.is_rename():
                continue
            if alteration is None:
                raise UnsupportedOperationError(
                    "change column",
                    platform.name,
                    f"Column '{column_diff.old_column_name}' cannot be altered in place.",
                )
            listener_sql.extend(
                self._dispatch(
                    SchemaEvent.ALTER_TABLE_CHANGE_COLUMN,
                    table_name,
                    diff,
                    column=column_diff.column,
                    column_diff=column_diff,
                )
            )
            if alteration == GRANULAR:
                items.extend(self._granular_changes(diff, table_name, column_diff))
            elif alteration == REDEFINE:
                items.extend(self._redefine_changes(column_diff))
        return items

    def _granular_changes(
        self, diff: TableDiff, table_name: str, column_diff: ColumnDiff
    ) -> List[AlterItem]:
        """One clause per changed attribute, addressed by the old column name."""
        platform = self.platform
        dialect = platform.dialect
        column = column_diff.column
        old_name = column_diff.old_identifier.get_quoted_name(platform)
        items: List[AlterItem] = []

        if column_diff.requires_type_change():
            # Declared from the new definition on every call; autoincrement is
            # handled by its own clauses below
            options = dict(column.to_options(), autoincrement=False)
            type_sql = platform.types.declare(column.column_type, options)
            items.append((CLAUSE, f"ALTER {old_name} TYPE {type_sql}"))

        if column_diff.has_changed("default"):
            items.append((CLAUSE, self._default_clause(old_name, column)))

        if column_diff.has_changed("notnull"):
            action = "SET" if column.notnull else "DROP"
            items.append((CLAUSE, f"ALTER {old_name} {action} NOT NULL"))

        if column_diff.has_changed("autoincrement"):
            if column.autoincrement:
                sequence = f"{diff.get_name()}_{column_diff.old_identifier.short_name}_seq"
                for template in dialect.autoincrement_enable_statements:
                    items.append(
                        (
                            STATEMENT,
                            template.format(
                                sequence=sequence, column=old_name, table=table_name
                            ),
                        )
                    )
                if dialect.autoincrement_enable_clause:
                    items.append(
                        (
                            CLAUSE,
                            dialect.autoincrement_enable_clause.format(
                                column=old_name, sequence=sequence
                            ),
                        )
                    )
            elif dialect.autoincrement_disable_clause:
                items.append(
                    (CLAUSE, dialect.autoincrement_disable_clause.format(column=old_name))
                )

        if column_diff.is_rename():
            items.append((CLAUSE, self._rename_clause(column_diff.old_column_name, column)))

        if column_diff.has_changed("comment") and dialect.supports_comment_on_statement:
            items.append(
                (STATEMENT, platform.get_comment_on_column_sql(diff, column, column.comment))
            )
        return items

    def _redefine_changes(self, column_diff: ColumnDiff) -> List[AlterItem]:
        """Restate the column, or only touch its default when nothing else moved."""
        platform = self.platform
        column = column_diff.column
        old_name = column_diff.old_identifier.get_quoted_name(platform)
        if (
            column_diff.changed_properties == {"default"}
            and not column_diff.is_rename()
            and not column.column_definition
        ):
            return [(CLAUSE, self._default_clause(old_name, column))]

        declaration = platform.get_column_declaration_sql(
            column.get_quoted_name(platform), column
        )
        return [
            (
                CLAUSE,
                platform.dialect.change_column_clause.format(
                    old=old_name, declaration=declaration
                ),
            )
        ]

    def _default_clause(self, old_name: str, column) -> str:
        if column.default is None:
            return f"ALTER {old_name} DROP DEFAULT"
        return f"ALTER {old_name} SET" + self.platform.get_default_value_declaration_sql(column)

    def _rename_clause(self, old_name: str, column) -> str:
        platform = self.platform
        new_name = column.get_quoted_name(platform)
        return platform.dialect.rename_column_clause.format(
            old=Identifier.parse(old_name).get_quoted_name(platform),
            new=new_name,
            declaration=platform.get_column_declaration_sql(new_name, column),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _render_items(self, table_name: str, items: List[AlterItem]) -> List[str]:
        if self.platform.dialect.combined_alter_table:
            clauses = [text for kind, text in items if kind == CLAUSE]
            statements = [text for kind, text in items if kind == STATEMENT]
            if clauses:
                statements.insert(0, f"ALTER TABLE {table_name} {', '.join(clauses)}")
            return statements
        return [
            f"ALTER TABLE {table_name} {text}" if kind == CLAUSE else text
            for kind, text in items
        ]

    def _dispatch(
        self, event: SchemaEvent, table_name: str, diff: TableDiff, **payload
    ) -> List[str]:
        listeners = self.platform.listeners
        if not listeners.has_listeners(event):
            return []
        return listeners.dispatch(
            SchemaEventArgs(
                event, self.platform.name, table_name, table_diff=diff, **payload
            )
        )


__all__ = ["AlterTableBuilder"]
