"""Table schema object.

A Table owns its columns, primary key, indexes, unique constraints and
foreign keys. Builder methods validate their input and generate names for
unnamed indexes and constraints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from schema_ddl.config.settings import get_settings
from schema_ddl.infrastructure.sql.exceptions import InvalidArgumentError

from .asset import Identifier, NamedAsset, generate_identifier_name
from .core import Column, ColumnType, ForeignKeyConstraint, Index, UniqueConstraint


@dataclass
class Table(NamedAsset):
    """
    Dialect-neutral table definition.

    Example:
        >>> table = Table("test")
        >>> id_column = table.add_column("id", "integer", autoincrement=True)
        >>> test_column = table.add_column("test", "string", notnull=False, length=255)
        >>> primary = table.set_primary_key(["id"])
    """

    name: str
    columns: Dict[str, Column] = field(default_factory=dict)
    primary_key: Optional[Index] = None
    indexes: Dict[str, Index] = field(default_factory=dict)
    unique_constraints: Dict[str, UniqueConstraint] = field(default_factory=dict)
    foreign_keys: Dict[str, ForeignKeyConstraint] = field(default_factory=dict)
    options: Dict[str, Any] = field(default_factory=dict)
    max_identifier_length: int = field(
        default_factory=lambda: get_settings().max_identifier_length
    )

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def add_column(
        self, name: str, column_type: Union[ColumnType, str], **options: Any
    ) -> Column:
        """Create a column and append it to the table."""
        column = Column(name, column_type, **options)
        key = column.identifier.key
        if key in self.columns:
            raise InvalidArgumentError(
                f"Column already exists on table '{self.name}'", name
            )
        self.columns[key] = column
        return column

    def has_column(self, name: str) -> bool:
        return Identifier.parse(name).key in self.columns

    def get_column(self, name: str) -> Column:
        key = Identifier.parse(name).key
        if key not in self.columns:
            raise InvalidArgumentError(
                f"Column does not exist on table '{self.name}'", name
            )
        return self.columns[key]

    def get_columns(self) -> List[Column]:
        return list(self.columns.values())

    # ------------------------------------------------------------------
    # Keys and indexes
    # ------------------------------------------------------------------

    def set_primary_key(self, columns: List[str], index_name: str = "primary") -> Index:
        """Declare the primary key; primary key columns become NOT NULL."""
        self._assert_columns_exist(columns)
        for name in columns:
            self.get_column(name).notnull = True
        self.primary_key = Index(index_name, columns, is_unique=True, is_primary=True)
        return self.primary_key

    def add_index(
        self,
        columns: List[str],
        name: Optional[str] = None,
        flags: Optional[List[str]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Index:
        name = name or self._generate_name(columns, "idx")
        index = Index(name, columns, flags=flags or [], options=options or {})
        return self._add_index(index)

    def add_unique_index(
        self,
        columns: List[str],
        name: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Index:
        name = name or self._generate_name(columns, "uniq")
        index = Index(name, columns, is_unique=True, options=options or {})
        return self._add_index(index)

    def add_unique_constraint(
        self,
        columns: List[str],
        name: Optional[str] = None,
        flags: Optional[List[str]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> UniqueConstraint:
        self._assert_columns_exist(columns)
        name = name or self._generate_name(columns, "uniq")
        constraint = UniqueConstraint(name, columns, flags=flags or [], options=options or {})
        self.unique_constraints[constraint.identifier.key] = constraint
        return constraint

    def add_foreign_key_constraint(
        self,
        foreign_table: Union["Table", str],
        local_columns: List[str],
        foreign_columns: List[str],
        options: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
    ) -> ForeignKeyConstraint:
        """
        Add a foreign key and, unless an existing index already spans the
        local columns, an implicit index backing it.
        """
        self._assert_columns_exist(local_columns)
        if isinstance(foreign_table, Table):
            foreign_table._assert_columns_exist(foreign_columns)
            foreign_table_name = foreign_table.name
        else:
            foreign_table_name = foreign_table

        name = name or self._generate_name(local_columns, "fk")
        constraint = ForeignKeyConstraint(
            local_columns, foreign_table_name, foreign_columns, name, options or {}
        )
        self.foreign_keys[constraint.identifier.key] = constraint

        if not any(index.spans_columns(local_columns) for index in self.get_indexes()):
            self.add_index(local_columns, self._generate_name(local_columns, "idx"))
        return constraint

    def get_indexes(self) -> List[Index]:
        """All indexes, primary key first."""
        indexes = list(self.indexes.values())
        if self.primary_key is not None:
            indexes.insert(0, self.primary_key)
        return indexes

    def get_foreign_keys(self) -> List[ForeignKeyConstraint]:
        return list(self.foreign_keys.values())

    def get_unique_constraints(self) -> List[UniqueConstraint]:
        return list(self.unique_constraints.values())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _add_index(self, index: Index) -> Index:
        self._assert_columns_exist(index.columns)
        key = index.identifier.key
        if key in self.indexes:
            raise InvalidArgumentError(
                f"Index already exists on table '{self.name}'", index.name
            )
        self.indexes[key] = index
        return index

    def _assert_columns_exist(self, columns: List[str]) -> None:
        if not columns:
            raise InvalidArgumentError(f"Empty column list on table '{self.name}'")
        for name in columns:
            if not self.has_column(name):
                raise InvalidArgumentError(
                    f"Column does not exist on table '{self.name}'", name
                )

    def _generate_name(self, columns: List[str], prefix: str) -> str:
        return generate_identifier_name(
            [self.get_name(), *columns], prefix, self.max_identifier_length
        )


__all__ = ["Table"]
