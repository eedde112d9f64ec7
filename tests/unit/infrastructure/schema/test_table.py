"""
Unit tests for the Table schema object and its column and index types.
"""

import pytest

from schema_ddl.infrastructure.schema import (
    Column,
    ColumnType,
    Index,
    Table,
    generate_identifier_name,
)
from schema_ddl.infrastructure.sql.exceptions import (
    InvalidArgumentError,
    UnknownTypeError,
)


@pytest.mark.unit
class TestColumn:
    """Tests for Column."""

    def test_type_coerced_from_string(self):
        assert Column("id", "INTEGER").column_type is ColumnType.INTEGER

    def test_unknown_type(self):
        with pytest.raises(UnknownTypeError):
            Column("id", "geometry")

    def test_defaults(self):
        column = Column("name", "string")
        assert column.notnull is True
        assert column.default is None
        assert column.autoincrement is False
        assert column.platform_options == {}

    def test_to_options(self):
        column = Column("price", "decimal", precision=8, scale=2)
        assert column.to_options() == {
            "length": None,
            "precision": 8,
            "scale": 2,
            "fixed": False,
            "unsigned": False,
            "autoincrement": False,
        }


@pytest.mark.unit
class TestIndex:
    """Tests for Index."""

    def test_primary_implies_unique(self):
        assert Index("primary", ["id"], is_primary=True).is_unique

    def test_requires_columns(self):
        with pytest.raises(InvalidArgumentError):
            Index("idx_empty", [])

    def test_flags_case_insensitive(self):
        index = Index("ft", ["body"], flags=["FULLTEXT"])
        assert index.has_flag("fulltext")
        assert index.flags == ["fulltext"]

    def test_spans_columns(self):
        index = Index("idx", ["a", "b"])
        assert index.spans_columns(["a"])
        assert index.spans_columns(["A", "b"])
        assert not index.spans_columns(["b"])
        assert not index.spans_columns([])

    def test_where_option(self):
        assert Index("idx", ["a"], options={"where": "a > 1"}).where == "a > 1"
        assert Index("idx", ["a"]).where is None


@pytest.mark.unit
class TestTable:
    """Tests for Table builder methods."""

    def test_columns_keep_insertion_order(self, make_test_table):
        table = make_test_table()
        assert [column.name for column in table.get_columns()] == ["id", "test"]

    def test_duplicate_column(self):
        table = Table("test")
        table.add_column("id", "integer")
        with pytest.raises(InvalidArgumentError):
            table.add_column("ID", "integer")

    def test_column_lookup_case_insensitive(self):
        table = Table("test")
        table.add_column("Email", "string")
        assert table.has_column("email")
        assert table.get_column("EMAIL").name == "Email"

    def test_missing_column(self):
        with pytest.raises(InvalidArgumentError):
            Table("test").get_column("nope")

    def test_primary_key_forces_not_null(self):
        table = Table("test")
        table.add_column("id", "integer", notnull=False)
        primary = table.set_primary_key(["id"])

        assert primary.is_primary
        assert table.get_column("id").notnull is True
        assert table.get_indexes()[0] is primary

    def test_index_on_unknown_column(self):
        table = Table("test")
        table.add_column("id", "integer")
        with pytest.raises(InvalidArgumentError):
            table.add_index(["missing"])

    def test_generated_index_name(self):
        table = Table("test")
        table.add_column("foo", "integer")
        table.add_column("bar", "integer")

        index = table.add_unique_index(["foo", "bar"])

        assert index.name == "UNIQ_D87F7E0C8C73652176FF8CAA"
        assert index.is_unique

    def test_generated_name_respects_max_length(self):
        table = Table("test", max_identifier_length=10)
        table.add_column("foo", "integer")
        assert len(table.add_index(["foo"]).name) == 10

    def test_max_length_defaults_to_settings(self, monkeypatch):
        monkeypatch.setenv("SCHEMA_DDL_MAX_IDENTIFIER_LENGTH", "12")

        table = Table("test")
        table.add_column("foo", "integer")
        table.add_column("bar", "integer")

        assert table.max_identifier_length == 12
        assert table.add_unique_index(["foo", "bar"]).name == "UNIQ_D87F7E0"

    def test_foreign_key_adds_backing_index(self):
        table = Table("test")
        table.add_column("group_id", "integer")

        table.add_foreign_key_constraint("groups", ["group_id"], ["id"], name="fk_group")

        assert len(table.indexes) == 1
        assert next(iter(table.indexes.values())).columns == ["group_id"]

    def test_foreign_key_reuses_spanning_index(self):
        table = Table("test")
        table.add_column("group_id", "integer")
        table.add_column("name", "string")
        table.add_index(["group_id", "name"], "idx_group_name")

        table.add_foreign_key_constraint("groups", ["group_id"], ["id"])

        assert list(table.indexes) == ["idx_group_name"]
        assert table.get_foreign_keys()[0].name.startswith("FK_")

    def test_foreign_key_checks_foreign_table_columns(self):
        groups = Table("groups")
        groups.add_column("id", "integer")
        table = Table("test")
        table.add_column("group_id", "integer")

        with pytest.raises(InvalidArgumentError):
            table.add_foreign_key_constraint(groups, ["group_id"], ["missing"])

    def test_unique_constraint(self):
        table = Table("test")
        table.add_column("email", "string")
        constraint = table.add_unique_constraint(["email"], "uniq_email")
        assert table.get_unique_constraints() == [constraint]


@pytest.mark.unit
class TestIdentifierNames:
    """Generated identifier names are deterministic."""

    def test_known_value(self):
        assert generate_identifier_name(["test", "foo", "bar"], "uniq") == (
            "UNIQ_D87F7E0C8C73652176FF8CAA"
        )

    def test_stable_across_calls(self):
        assert generate_identifier_name(["a", "b"], "idx") == generate_identifier_name(
            ["a", "b"], "idx"
        )

    def test_truncated(self):
        assert generate_identifier_name(["a", "b", "c"], "idx", max_size=8) == (
            generate_identifier_name(["a", "b", "c"], "idx")[:8]
        )
