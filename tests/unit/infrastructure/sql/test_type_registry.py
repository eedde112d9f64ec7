"""
Unit tests for the database type alias registry and dialect lookup.
"""

import pytest

from schema_ddl.infrastructure.schema.core import ColumnType
from schema_ddl.infrastructure.sql.core.type_registry import TypeRegistry
from schema_ddl.infrastructure.sql.dialects import (
    MYSQL,
    POSTGRESQL,
    SQLITE,
    get_dialect,
    list_dialects,
)
from schema_ddl.infrastructure.sql.exceptions import (
    InvalidArgumentError,
    UnknownTypeError,
)
from schema_ddl.infrastructure.sql.platform import Platform


@pytest.mark.unit
class TestTypeRegistry:
    """Tests for TypeRegistry."""

    def test_builtin_aliases_case_insensitive(self):
        registry = TypeRegistry("test", {"VARCHAR": ColumnType.STRING})
        assert registry.get("varchar") is ColumnType.STRING
        assert registry.get("VarChar") is ColumnType.STRING
        assert registry.has("VARCHAR")

    def test_unknown_alias_names_platform(self):
        registry = TypeRegistry("postgresql", {})
        with pytest.raises(UnknownTypeError) as exc_info:
            registry.get("foobar")

        assert exc_info.value.type_name == "foobar"
        assert 'platform "postgresql"' in str(exc_info.value)

    def test_register_accepts_string_kind(self):
        registry = TypeRegistry("test", {})
        registry.register("FOO", "integer")
        assert registry.get("foo") is ColumnType.INTEGER
        assert len(registry) == 1

    def test_register_overwrites(self):
        registry = TypeRegistry("test", {"foo": ColumnType.STRING})
        registry.register("foo", ColumnType.TEXT)
        assert registry.get("foo") is ColumnType.TEXT

    def test_register_unknown_kind_rejected(self):
        registry = TypeRegistry("test", {})
        with pytest.raises(UnknownTypeError):
            registry.register("foo", "geometry")
        assert not registry.has("foo")

    def test_aliases_sorted(self):
        registry = TypeRegistry("test", {"b": ColumnType.TEXT, "a": ColumnType.TEXT})
        assert registry.aliases() == ["a", "b"]


@pytest.mark.unit
class TestPlatformTypeMappings:
    """Type mappings through the platform."""

    @pytest.mark.parametrize(
        "alias,expected",
        [
            ("jsonb", ColumnType.JSON),
            ("int8", ColumnType.BIGINT),
            ("timestamptz", ColumnType.DATETIMETZ),
            ("uuid", ColumnType.GUID),
        ],
    )
    def test_postgresql_builtins(self, postgresql_platform, alias, expected):
        assert postgresql_platform.get_type_mapping(alias) is expected

    def test_mysql_builtins(self, mysql_platform):
        assert mysql_platform.get_type_mapping("mediumtext") is ColumnType.TEXT
        assert mysql_platform.get_type_mapping("tinyint") is ColumnType.BOOLEAN

    def test_registration_scoped_to_platform(self, settings):
        first = Platform(POSTGRESQL, settings)
        second = Platform(POSTGRESQL, settings)

        first.register_type_mapping("foo", "integer")

        assert first.has_type_mapping("foo")
        assert not second.has_type_mapping("foo")

    def test_unknown_mapping(self, sqlite_platform):
        with pytest.raises(UnknownTypeError):
            sqlite_platform.get_type_mapping("jsonb")


@pytest.mark.unit
class TestDialectLookup:
    """Tests for get_dialect and list_dialects."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("postgresql", POSTGRESQL),
            ("PostgreSQL", POSTGRESQL),
            ("postgres", POSTGRESQL),
            ("pg", POSTGRESQL),
            ("mysql", MYSQL),
            ("mariadb", MYSQL),
            ("sqlite", SQLITE),
            ("sqlite3", SQLITE),
        ],
    )
    def test_names_and_aliases(self, name, expected):
        assert get_dialect(name) is expected

    def test_unknown_dialect(self):
        with pytest.raises(InvalidArgumentError):
            get_dialect("oracle")

    def test_list_dialects(self):
        assert list_dialects() == ["mysql", "postgresql", "sqlite"]
