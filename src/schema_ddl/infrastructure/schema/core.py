"""Core schema object types.

Dialect-neutral descriptions of columns, indexes and constraints. The platform
engine only reads these objects; it never mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union

from schema_ddl.infrastructure.sql.exceptions import (
    InvalidArgumentError,
    UnknownTypeError,
)

from .asset import Identifier, NamedAsset


class ColumnType(Enum):
    """Supported semantic column types."""

    SMALLINT = "smallint"
    INTEGER = "integer"
    BIGINT = "bigint"
    DECIMAL = "decimal"
    FLOAT = "float"
    STRING = "string"
    ASCII_STRING = "ascii_string"
    TEXT = "text"
    GUID = "guid"
    BINARY = "binary"
    BLOB = "blob"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    DATETIMETZ = "datetimetz"
    TIME = "time"
    JSON = "json"

    @classmethod
    def coerce(cls, value: Union["ColumnType", str]) -> "ColumnType":
        """Accept either a ColumnType or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnknownTypeError(str(value)) from None


INTEGER_TYPES = frozenset({ColumnType.SMALLINT, ColumnType.INTEGER, ColumnType.BIGINT})
NUMERIC_TYPES = INTEGER_TYPES | {ColumnType.DECIMAL, ColumnType.FLOAT}
STRING_TYPES = frozenset({ColumnType.STRING, ColumnType.ASCII_STRING})

COLUMN_PROPERTIES = frozenset(
    {
        "type",
        "notnull",
        "default",
        "length",
        "precision",
        "scale",
        "fixed",
        "unsigned",
        "autoincrement",
        "comment",
    }
)


@dataclass
class Column(NamedAsset):
    """Definition of a single table column."""

    name: str
    column_type: ColumnType
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    fixed: bool = False
    notnull: bool = True
    default: Any = None
    autoincrement: bool = False
    unsigned: bool = False
    comment: Optional[str] = None
    column_definition: Optional[str] = None
    platform_options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.column_type = ColumnType.coerce(self.column_type)

    def to_options(self) -> Dict[str, Any]:
        """Options consumed by the type declaration service."""
        return {
            "length": self.length,
            "precision": self.precision,
            "scale": self.scale,
            "fixed": self.fixed,
            "unsigned": self.unsigned,
            "autoincrement": self.autoincrement,
        }


@dataclass
class Index(NamedAsset):
    """
    Definition of a table index.

    Column order defines the physical key order. A primary index is always
    unique. The ``where`` option turns the index into a partial index on
    dialects that support it.
    """

    name: str
    columns: List[str]
    is_unique: bool = False
    is_primary: bool = False
    flags: List[str] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.columns:
            raise InvalidArgumentError(
                f"Index '{self.name}' must have at least one column"
            )
        self.columns = list(self.columns)
        self.flags = [flag.lower() for flag in self.flags]
        if self.is_primary:
            self.is_unique = True

    @property
    def where(self) -> Optional[str]:
        return self.options.get("where")

    def has_flag(self, flag: str) -> bool:
        return flag.lower() in self.flags

    def spans_columns(self, column_names: Iterable[str]) -> bool:
        """Check whether the leading index columns are exactly the given ones."""
        wanted = [Identifier.parse(name).key for name in column_names]
        own = [Identifier.parse(name).key for name in self.columns]
        return bool(wanted) and own[: len(wanted)] == wanted


@dataclass
class UniqueConstraint(NamedAsset):
    """Unique constraint over an ordered column list. Never partial."""

    name: str
    columns: List[str]
    flags: List[str] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.columns = list(self.columns)


@dataclass
class ForeignKeyConstraint(NamedAsset):
    """
    Foreign key from local columns to columns of another table.

    Supported options: ``on_delete``, ``on_update`` (referential actions),
    ``deferrable`` and ``deferred`` (PostgreSQL only).
    """

    local_columns: List[str]
    foreign_table_name: str
    foreign_columns: List[str]
    name: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.local_columns = list(self.local_columns)
        self.foreign_columns = list(self.foreign_columns)

    @property
    def foreign_table(self) -> Identifier:
        return Identifier.parse(self.foreign_table_name)

    @property
    def on_delete(self) -> Optional[str]:
        return self.options.get("on_delete")

    @property
    def on_update(self) -> Optional[str]:
        return self.options.get("on_update")


__all__ = [
    "ColumnType",
    "Column",
    "Index",
    "UniqueConstraint",
    "ForeignKeyConstraint",
    "INTEGER_TYPES",
    "NUMERIC_TYPES",
    "STRING_TYPES",
    "COLUMN_PROPERTIES",
]
