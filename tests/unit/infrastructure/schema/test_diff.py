"""
Unit tests for the TableDiff and ColumnDiff models.
"""

import pytest

from schema_ddl.infrastructure.schema import Column, ColumnDiff, Index, TableDiff
from schema_ddl.infrastructure.sql.exceptions import InvalidArgumentError


@pytest.mark.unit
class TestColumnDiff:
    """Tests for ColumnDiff."""

    def test_unknown_property(self):
        with pytest.raises(InvalidArgumentError):
            ColumnDiff("bar", Column("bar", "string"), {"colour"})

    def test_rename_detection(self):
        assert ColumnDiff("bar", Column("baz", "string")).is_rename()
        assert not ColumnDiff("BAR", Column("bar", "string")).is_rename()
        assert not ColumnDiff('"bar"', Column("bar", "string")).is_rename()

    @pytest.mark.parametrize(
        "changed,expected",
        [
            ({"type"}, True),
            ({"length"}, True),
            ({"fixed"}, True),
            ({"default", "notnull"}, False),
            (set(), False),
        ],
    )
    def test_requires_type_change(self, changed, expected):
        diff = ColumnDiff("bar", Column("bar", "string"), changed)
        assert diff.requires_type_change() is expected


@pytest.mark.unit
class TestTableDiff:
    """Tests for TableDiff."""

    def test_new_diff_is_empty(self):
        diff = TableDiff("mytable")
        assert diff.is_empty()
        assert diff.new_identifier is None

    def test_rename_only_is_not_empty(self):
        diff = TableDiff("mytable", new_name="userlist")
        assert not diff.is_empty()
        assert diff.new_identifier.name == "userlist"

    def test_column_in_two_categories(self):
        diff = TableDiff(
            "mytable",
            removed_columns={"foo": Column("foo", "integer")},
            renamed_columns={"FOO": Column("bar", "integer")},
        )
        with pytest.raises(InvalidArgumentError, match="removed and renamed"):
            diff.validate()

    def test_index_added_and_removed(self):
        diff = TableDiff(
            "mytable",
            added_indexes={"idx": Index("idx", ["a"])},
            removed_indexes={"idx": Index("idx", ["a"])},
        )
        with pytest.raises(InvalidArgumentError):
            diff.validate()

    def test_index_changed_and_renamed(self):
        diff = TableDiff(
            "mytable",
            changed_indexes={"idx": Index("idx", ["a"])},
            renamed_indexes={"idx": Index("idx_new", ["a"])},
        )
        with pytest.raises(InvalidArgumentError):
            diff.validate()

    def test_removed_index_may_be_rename_source(self):
        diff = TableDiff(
            "mytable",
            removed_indexes={"idx": Index("idx", ["a"])},
            renamed_indexes={"idx": Index("idx_new", ["a"])},
        )
        diff.validate()
