"""
Unit tests for ALTER TABLE generation across dialects.

Covers the fixed statement order, per-dialect column alteration styles and
the handling of renamed columns and indexes.
"""

import pytest

from schema_ddl.infrastructure.schema import (
    Column,
    ColumnDiff,
    ForeignKeyConstraint,
    Index,
    TableDiff,
    UniqueConstraint,
)
from schema_ddl.infrastructure.sql.exceptions import (
    InvalidArgumentError,
    UnsupportedOperationError,
)
from schema_ddl.infrastructure.sql.operations import AlterTableBuilder


def _example_diff() -> TableDiff:
    """Add quota, remove foo, retype and rename bar, rename the table."""
    return TableDiff(
        "mytable",
        new_name="userlist",
        added_columns={"quota": Column("quota", "integer", notnull=False)},
        removed_columns={"foo": Column("foo", "integer")},
        changed_columns={
            "bar": ColumnDiff(
                "bar", Column("baz", "string", default="def"), {"type", "default"}
            )
        },
    )


def _renamed_columns_diff() -> TableDiff:
    return TableDiff(
        "mytable",
        renamed_columns={
            "unquoted1": Column("unquoted", "integer"),
            "unquoted2": Column("where", "integer"),
            "create": Column("reserved_keyword", "integer"),
            "table": Column("from", "integer"),
        },
    )


@pytest.mark.unit
class TestEmptyDiff:
    """Empty and no-op diffs produce nothing."""

    def test_empty_diff(self, any_platform):
        assert any_platform.get_alter_table_sql(TableDiff("mytable")) == []

    def test_unchanged_column_skipped(self, any_platform):
        diff = TableDiff(
            "mytable", changed_columns={"bar": ColumnDiff("bar", Column("bar", "string"))}
        )
        assert any_platform.get_alter_table_sql(diff) == []

    def test_invalid_diff_rejected(self, any_platform):
        diff = TableDiff(
            "mytable",
            added_columns={"foo": Column("foo", "integer")},
            removed_columns={"foo": Column("foo", "integer")},
        )
        with pytest.raises(InvalidArgumentError):
            any_platform.get_alter_table_sql(diff)


@pytest.mark.unit
class TestPostgreSQLAlter:
    """Granular column alteration."""

    def test_example_diff(self, postgresql_platform):
        assert postgresql_platform.get_alter_table_sql(_example_diff()) == [
            "ALTER TABLE mytable DROP foo",
            "ALTER TABLE mytable ADD quota INT DEFAULT NULL",
            "ALTER TABLE mytable ALTER bar TYPE VARCHAR",
            "ALTER TABLE mytable ALTER bar SET DEFAULT 'def'",
            "ALTER TABLE mytable RENAME COLUMN bar TO baz",
            "ALTER TABLE mytable RENAME TO userlist",
        ]

    def test_quoted_renames(self, postgresql_platform):
        assert postgresql_platform.get_alter_table_sql(_renamed_columns_diff()) == [
            "ALTER TABLE mytable RENAME COLUMN unquoted1 TO unquoted",
            'ALTER TABLE mytable RENAME COLUMN unquoted2 TO "where"',
            'ALTER TABLE mytable RENAME COLUMN "create" TO reserved_keyword',
            'ALTER TABLE mytable RENAME COLUMN "table" TO "from"',
        ]

    def test_nullability(self, postgresql_platform):
        diff = TableDiff(
            "mytable",
            changed_columns={
                "bar": ColumnDiff("bar", Column("bar", "string", notnull=False), {"notnull"}),
                "baz": ColumnDiff("baz", Column("baz", "string"), {"notnull"}),
            },
        )
        assert postgresql_platform.get_alter_table_sql(diff) == [
            "ALTER TABLE mytable ALTER bar DROP NOT NULL",
            "ALTER TABLE mytable ALTER baz SET NOT NULL",
        ]

    def test_default_dropped(self, postgresql_platform):
        diff = TableDiff(
            "mytable",
            changed_columns={"bar": ColumnDiff("bar", Column("bar", "string"), {"default"})},
        )
        assert postgresql_platform.get_alter_table_sql(diff) == [
            "ALTER TABLE mytable ALTER bar DROP DEFAULT"
        ]

    def test_enable_autoincrement(self, postgresql_platform):
        diff = TableDiff(
            "mytable",
            changed_columns={
                "id": ColumnDiff(
                    "id", Column("id", "integer", autoincrement=True), {"autoincrement"}
                )
            },
        )
        assert postgresql_platform.get_alter_table_sql(diff) == [
            "CREATE SEQUENCE mytable_id_seq",
            "SELECT setval('mytable_id_seq', (SELECT MAX(id) FROM mytable))",
            "ALTER TABLE mytable ALTER id SET DEFAULT nextval('mytable_id_seq')",
        ]

    def test_disable_autoincrement(self, postgresql_platform):
        diff = TableDiff(
            "mytable",
            changed_columns={
                "id": ColumnDiff("id", Column("id", "integer"), {"autoincrement"})
            },
        )
        assert postgresql_platform.get_alter_table_sql(diff) == [
            "ALTER TABLE mytable ALTER id DROP DEFAULT"
        ]

    def test_type_change_never_serial(self, postgresql_platform):
        diff = TableDiff(
            "mytable",
            changed_columns={
                "id": ColumnDiff("id", Column("id", "bigint", autoincrement=True), {"type"})
            },
        )
        assert postgresql_platform.get_alter_table_sql(diff) == [
            "ALTER TABLE mytable ALTER id TYPE BIGINT"
        ]

    def test_fixed_flip_redeclares_type(self, postgresql_platform):
        diff = TableDiff(
            "mytable",
            changed_columns={
                "code": ColumnDiff(
                    "code", Column("code", "string", length=10, fixed=True), {"fixed"}
                )
            },
        )
        assert postgresql_platform.get_alter_table_sql(diff) == [
            "ALTER TABLE mytable ALTER code TYPE CHAR(10)"
        ]

    def test_comment_changes(self, postgresql_platform):
        diff = TableDiff(
            "mytable",
            added_columns={"quota": Column("quota", "integer", comment="q")},
            changed_columns={
                "id": ColumnDiff("id", Column("id", "integer", comment="new"), {"comment"}),
                "bar": ColumnDiff("bar", Column("bar", "integer"), {"comment"}),
            },
        )
        assert postgresql_platform.get_alter_table_sql(diff) == [
            "ALTER TABLE mytable ADD quota INT NOT NULL",
            "COMMENT ON COLUMN mytable.quota IS 'q'",
            "COMMENT ON COLUMN mytable.id IS 'new'",
            "COMMENT ON COLUMN mytable.bar IS NULL",
        ]

    def test_index_and_foreign_key_order(self, postgresql_platform):
        diff = TableDiff(
            "mytable",
            new_name="userlist",
            added_indexes={"idx_new": Index("idx_new", ["b"])},
            removed_indexes={"idx_old": Index("idx_old", ["a"])},
            changed_indexes={"idx_chg": Index("idx_chg", ["c", "d"])},
            renamed_indexes={"idx_foo": Index("idx_bar", ["e"])},
            added_unique_constraints={"uniq_x": UniqueConstraint("uniq_x", ["x"])},
            removed_foreign_keys=["fk_old"],
            added_foreign_keys=[ForeignKeyConstraint(["b"], "other", ["id"], "fk_new")],
        )
        assert postgresql_platform.get_alter_table_sql(diff) == [
            "ALTER TABLE mytable DROP CONSTRAINT fk_old",
            "DROP INDEX idx_old",
            "DROP INDEX idx_chg",
            "CREATE INDEX idx_new ON mytable (b)",
            "CREATE INDEX idx_chg ON mytable (c, d)",
            "ALTER TABLE mytable ADD CONSTRAINT uniq_x UNIQUE (x)",
            "ALTER INDEX idx_foo RENAME TO idx_bar",
            "ALTER TABLE mytable ADD CONSTRAINT fk_new FOREIGN KEY (b) REFERENCES other (id)",
            "ALTER TABLE mytable RENAME TO userlist",
        ]

    def test_removed_rename_source_not_dropped(self, postgresql_platform):
        diff = TableDiff(
            "mytable",
            removed_indexes={"idx_foo": Index("idx_foo", ["e"])},
            renamed_indexes={"idx_foo": Index("idx_bar", ["e"])},
        )
        assert postgresql_platform.get_alter_table_sql(diff) == [
            "ALTER INDEX idx_foo RENAME TO idx_bar"
        ]

    def test_changed_primary_key(self, postgresql_platform):
        diff = TableDiff(
            "mytable",
            changed_indexes={"primary": Index("primary", ["id", "x"], is_primary=True)},
        )
        assert postgresql_platform.get_alter_table_sql(diff) == [
            "ALTER TABLE mytable DROP CONSTRAINT mytable_pkey",
            "ALTER TABLE mytable ADD PRIMARY KEY (id, x)",
        ]

    def test_changed_foreign_key_dropped_and_added(self, postgresql_platform):
        foreign_key = ForeignKeyConstraint(
            ["b"], "other", ["id"], "fk_b", {"on_delete": "restrict"}
        )
        diff = TableDiff("mytable", changed_foreign_keys=[foreign_key])
        assert postgresql_platform.get_alter_table_sql(diff) == [
            "ALTER TABLE mytable DROP CONSTRAINT fk_b",
            "ALTER TABLE mytable ADD CONSTRAINT fk_b FOREIGN KEY (b) REFERENCES other (id) "
            "ON DELETE RESTRICT",
        ]


@pytest.mark.unit
class TestMySQLAlter:
    """Column clauses merged into one statement; changed columns redefined."""

    def test_example_diff(self, mysql_platform):
        assert mysql_platform.get_alter_table_sql(_example_diff()) == [
            "ALTER TABLE mytable DROP foo, ADD quota INT DEFAULT NULL, "
            "CHANGE bar baz VARCHAR(255) DEFAULT 'def' NOT NULL",
            "ALTER TABLE mytable RENAME TO userlist",
        ]

    def test_renames_restate_declaration(self, mysql_platform):
        assert mysql_platform.get_alter_table_sql(_renamed_columns_diff()) == [
            "ALTER TABLE mytable CHANGE unquoted1 unquoted INT NOT NULL, "
            "CHANGE unquoted2 `where` INT NOT NULL, "
            "CHANGE `create` reserved_keyword INT NOT NULL, "
            "CHANGE `table` `from` INT NOT NULL"
        ]

    def test_default_only_change(self, mysql_platform):
        diff = TableDiff(
            "mytable",
            changed_columns={
                "bar": ColumnDiff("bar", Column("bar", "string", default="x"), {"default"}),
                "baz": ColumnDiff("baz", Column("baz", "string"), {"default"}),
            },
        )
        assert mysql_platform.get_alter_table_sql(diff) == [
            "ALTER TABLE mytable ALTER bar SET DEFAULT 'x', ALTER baz DROP DEFAULT"
        ]

    def test_column_definition_forces_change(self, mysql_platform):
        diff = TableDiff(
            "mytable",
            changed_columns={
                "bar": ColumnDiff(
                    "bar",
                    Column("bar", "string", column_definition="VARCHAR(10) BINARY"),
                    {"default"},
                )
            },
        )
        assert mysql_platform.get_alter_table_sql(diff) == [
            "ALTER TABLE mytable CHANGE bar bar VARCHAR(10) BINARY"
        ]

    def test_index_statements(self, mysql_platform):
        diff = TableDiff(
            "mytable",
            removed_indexes={"idx_old": Index("idx_old", ["a"])},
            renamed_indexes={"idx_foo": Index("idx_bar", ["e"])},
            removed_foreign_keys=["fk_old"],
        )
        assert mysql_platform.get_alter_table_sql(diff) == [
            "ALTER TABLE mytable DROP FOREIGN KEY fk_old",
            "DROP INDEX idx_old ON mytable",
            "ALTER TABLE mytable RENAME INDEX idx_foo TO idx_bar",
        ]

    def test_dropped_primary_key(self, mysql_platform):
        diff = TableDiff(
            "mytable",
            removed_indexes={"primary": Index("primary", ["id"], is_primary=True)},
        )
        assert mysql_platform.get_alter_table_sql(diff) == [
            "ALTER TABLE mytable DROP PRIMARY KEY"
        ]


@pytest.mark.unit
class TestSQLiteAlter:
    """SQLite only adds, drops and renames columns."""

    def test_add_and_drop_columns(self, sqlite_platform):
        diff = TableDiff(
            "mytable",
            added_columns={"quota": Column("quota", "integer", notnull=False)},
            removed_columns={"foo": Column("foo", "integer")},
        )
        assert sqlite_platform.get_alter_table_sql(diff) == [
            "ALTER TABLE mytable DROP COLUMN foo",
            "ALTER TABLE mytable ADD COLUMN quota INTEGER DEFAULT NULL",
        ]

    def test_rename_column(self, sqlite_platform):
        diff = TableDiff("mytable", renamed_columns={"old": Column("new", "integer")})
        assert sqlite_platform.get_alter_table_sql(diff) == [
            "ALTER TABLE mytable RENAME COLUMN old TO new"
        ]

    def test_changed_column_unsupported(self, sqlite_platform):
        with pytest.raises(UnsupportedOperationError) as exc_info:
            sqlite_platform.get_alter_table_sql(_example_diff())
        assert "bar" in str(exc_info.value)

    def test_foreign_keys_unsupported(self, sqlite_platform):
        diff = TableDiff("mytable", removed_foreign_keys=["fk_old"])
        with pytest.raises(UnsupportedOperationError):
            sqlite_platform.get_alter_table_sql(diff)

    def test_rename_index(self, sqlite_platform):
        diff = TableDiff("mytable", renamed_indexes={"idx_foo": Index("idx_bar", ["id"])})
        assert sqlite_platform.get_alter_table_sql(diff) == [
            "DROP INDEX idx_foo",
            "CREATE INDEX idx_bar ON mytable (id)",
        ]


@pytest.mark.unit
def test_builder_matches_platform(postgresql_platform):
    """The builder is what get_alter_table_sql delegates to."""
    builder = AlterTableBuilder(postgresql_platform)
    assert builder.build(_example_diff()) == postgresql_platform.get_alter_table_sql(
        _example_diff()
    )
