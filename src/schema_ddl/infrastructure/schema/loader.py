"""
YAML definitions of tables and table diffs.

This module provides Pydantic models validating table and table diff
documents, and builds the corresponding Table and TableDiff objects.

Table document:

    name: users
    columns:
      - {name: id, type: integer, autoincrement: true}
      - {name: email, type: string, length: 255}
    primary_key: [id]
    indexes:
      - {name: idx_email, columns: [email], where: "email IS NOT NULL"}
    foreign_keys:
      - {local_columns: [group_id], foreign_table: groups,
         foreign_columns: [id], on_delete: cascade}
    options: {engine: InnoDB}

Diff document:

    name: users
    new_name: userlist
    added_columns: [{name: quota, type: integer, notnull: false}]
    removed_columns: [foo]
    changed_columns:
      - old_name: bar
        column: {name: bar, type: string, length: 255}
        changed_properties: [type]
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from schema_ddl.infrastructure.sql.exceptions import InvalidArgumentError

from .core import (
    COLUMN_PROPERTIES,
    Column,
    ColumnType,
    ForeignKeyConstraint,
    Index,
    UniqueConstraint,
)
from .diff import ColumnDiff, TableDiff
from .table import Table

logger = logging.getLogger(__name__)


class SchemaDefinitionError(InvalidArgumentError):
    """Raised when a table or table diff document is invalid."""

    pass


class ColumnSpec(BaseModel):
    """Schema for one column."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, description="Column name, optionally quoted")
    type: ColumnType = Field(..., description="Semantic column type")
    length: Optional[int] = Field(None, ge=1)
    precision: Optional[int] = Field(None, ge=1)
    scale: Optional[int] = Field(None, ge=0)
    fixed: bool = False
    notnull: bool = True
    default: Any = None
    autoincrement: bool = False
    unsigned: bool = False
    comment: Optional[str] = None
    column_definition: Optional[str] = Field(
        None, description="Raw SQL replacing the generated declaration"
    )
    charset: Optional[str] = None
    collation: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def column_options(self) -> Dict[str, Any]:
        """Keyword options accepted by Column and Table.add_column."""
        platform_options = {}
        if self.charset:
            platform_options["charset"] = self.charset
        if self.collation:
            platform_options["collation"] = self.collation
        return {
            "length": self.length,
            "precision": self.precision,
            "scale": self.scale,
            "fixed": self.fixed,
            "notnull": self.notnull,
            "default": self.default,
            "autoincrement": self.autoincrement,
            "unsigned": self.unsigned,
            "comment": self.comment,
            "column_definition": self.column_definition,
            "platform_options": platform_options,
        }

    def to_column(self) -> Column:
        return Column(self.name, self.type, **self.column_options())


class IndexSpec(BaseModel):
    """Schema for one index."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    columns: List[str] = Field(..., min_length=1)
    unique: bool = False
    primary: bool = False
    flags: List[str] = Field(default_factory=list)
    where: Optional[str] = Field(None, description="Partial index predicate")

    def to_index(self) -> Index:
        if not self.name:
            raise SchemaDefinitionError("Index in a table diff must be named", self.columns)
        return Index(
            self.name,
            self.columns,
            is_unique=self.unique,
            is_primary=self.primary,
            flags=self.flags,
            options=self.index_options(),
        )

    def index_options(self) -> Dict[str, Any]:
        return {"where": self.where} if self.where else {}


class UniqueConstraintSpec(BaseModel):
    """Schema for one unique constraint."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    columns: List[str] = Field(..., min_length=1)

    def to_constraint(self) -> UniqueConstraint:
        if not self.name:
            raise SchemaDefinitionError(
                "Unique constraint in a table diff must be named", self.columns
            )
        return UniqueConstraint(self.name, self.columns)


class ForeignKeySpec(BaseModel):
    """Schema for one foreign key."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    local_columns: List[str] = Field(..., min_length=1)
    foreign_table: str = Field(..., min_length=1)
    foreign_columns: List[str] = Field(..., min_length=1)
    on_delete: Optional[str] = None
    on_update: Optional[str] = None
    deferrable: Optional[bool] = None
    deferred: Optional[bool] = None

    def options(self) -> Dict[str, Any]:
        options = {
            "on_delete": self.on_delete,
            "on_update": self.on_update,
            "deferrable": self.deferrable,
            "deferred": self.deferred,
        }
        return {key: value for key, value in options.items() if value is not None}

    def to_constraint(self) -> ForeignKeyConstraint:
        return ForeignKeyConstraint(
            self.local_columns,
            self.foreign_table,
            self.foreign_columns,
            self.name,
            self.options(),
        )


class TableSpec(BaseModel):
    """Schema for a complete table document."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    columns: List[ColumnSpec] = Field(default_factory=list)
    primary_key: List[str] = Field(default_factory=list)
    indexes: List[IndexSpec] = Field(default_factory=list)
    unique_constraints: List[UniqueConstraintSpec] = Field(default_factory=list)
    foreign_keys: List[ForeignKeySpec] = Field(default_factory=list)
    options: Dict[str, Any] = Field(default_factory=dict)


class ColumnChangeSpec(BaseModel):
    """Schema for one changed column."""

    model_config = ConfigDict(extra="forbid")

    old_name: str = Field(..., min_length=1)
    column: ColumnSpec
    changed_properties: List[str] = Field(default_factory=list)
    from_column: Optional[ColumnSpec] = None

    @field_validator("changed_properties")
    @classmethod
    def validate_changed_properties(cls, v: List[str]) -> List[str]:
        unknown = sorted(set(v) - COLUMN_PROPERTIES)
        if unknown:
            raise ValueError(
                f"Unknown changed properties {unknown}, "
                f"expected a subset of {sorted(COLUMN_PROPERTIES)}"
            )
        return v

    def to_column_diff(self) -> ColumnDiff:
        return ColumnDiff(
            self.old_name,
            self.column.to_column(),
            frozenset(self.changed_properties),
            self.from_column.to_column() if self.from_column else None,
        )


class TableDiffSpec(BaseModel):
    """Schema for a table diff document."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    new_name: Optional[str] = None
    added_columns: List[ColumnSpec] = Field(default_factory=list)
    removed_columns: List[Union[str, ColumnSpec]] = Field(default_factory=list)
    changed_columns: List[ColumnChangeSpec] = Field(default_factory=list)
    renamed_columns: Dict[str, ColumnSpec] = Field(default_factory=dict)
    added_indexes: List[IndexSpec] = Field(default_factory=list)
    removed_indexes: List[IndexSpec] = Field(default_factory=list)
    changed_indexes: List[IndexSpec] = Field(default_factory=list)
    renamed_indexes: Dict[str, IndexSpec] = Field(default_factory=dict)
    added_unique_constraints: List[UniqueConstraintSpec] = Field(default_factory=list)
    removed_unique_constraints: List[Union[str, UniqueConstraintSpec]] = Field(
        default_factory=list
    )
    changed_unique_constraints: List[UniqueConstraintSpec] = Field(default_factory=list)
    added_foreign_keys: List[ForeignKeySpec] = Field(default_factory=list)
    removed_foreign_keys: List[Union[str, ForeignKeySpec]] = Field(default_factory=list)
    changed_foreign_keys: List[ForeignKeySpec] = Field(default_factory=list)


# ============================================================================
# Builders
# ============================================================================


def table_from_dict(data: Dict[str, Any]) -> Table:
    """
    Build a Table from a parsed table document.

    Raises:
        SchemaDefinitionError: If the document does not match TableSpec
        InvalidArgumentError: If the definition is inconsistent (e.g. an
            index on an unknown column)
    """
    spec = _validate(TableSpec, data, "table")
    table = Table(spec.name, options=dict(spec.options))
    for column_spec in spec.columns:
        table.add_column(column_spec.name, column_spec.type, **column_spec.column_options())
    if spec.primary_key:
        table.set_primary_key(spec.primary_key)
    for index_spec in spec.indexes:
        if index_spec.primary:
            table.set_primary_key(index_spec.columns, index_spec.name or "primary")
        elif index_spec.unique:
            table.add_unique_index(
                index_spec.columns, index_spec.name, options=index_spec.index_options()
            )
        else:
            table.add_index(
                index_spec.columns,
                index_spec.name,
                flags=index_spec.flags,
                options=index_spec.index_options(),
            )
    for constraint_spec in spec.unique_constraints:
        table.add_unique_constraint(constraint_spec.columns, constraint_spec.name)
    for fk_spec in spec.foreign_keys:
        table.add_foreign_key_constraint(
            fk_spec.foreign_table,
            fk_spec.local_columns,
            fk_spec.foreign_columns,
            fk_spec.options(),
            fk_spec.name,
        )
    logger.debug(f"Built table '{table.name}' with {len(table.columns)} columns")
    return table


def table_diff_from_dict(data: Dict[str, Any]) -> TableDiff:
    """
    Build a TableDiff from a parsed diff document.

    Raises:
        SchemaDefinitionError: If the document does not match TableDiffSpec
    """
    spec = _validate(TableDiffSpec, data, "table diff")
    diff = TableDiff(
        spec.name,
        new_name=spec.new_name,
        added_columns=_by_name(c.to_column() for c in spec.added_columns),
        removed_columns=_by_name(_removed_column(c) for c in spec.removed_columns),
        changed_columns={c.old_name: c.to_column_diff() for c in spec.changed_columns},
        renamed_columns={
            old: column.to_column() for old, column in spec.renamed_columns.items()
        },
        added_indexes=_by_name(i.to_index() for i in spec.added_indexes),
        removed_indexes=_by_name(i.to_index() for i in spec.removed_indexes),
        changed_indexes=_by_name(i.to_index() for i in spec.changed_indexes),
        renamed_indexes={old: i.to_index() for old, i in spec.renamed_indexes.items()},
        added_unique_constraints=_by_name(
            c.to_constraint() for c in spec.added_unique_constraints
        ),
        removed_unique_constraints=_by_name(
            UniqueConstraint(c, []) if isinstance(c, str) else c.to_constraint()
            for c in spec.removed_unique_constraints
        ),
        changed_unique_constraints=_by_name(
            c.to_constraint() for c in spec.changed_unique_constraints
        ),
        added_foreign_keys=[fk.to_constraint() for fk in spec.added_foreign_keys],
        removed_foreign_keys=[
            fk if isinstance(fk, str) else fk.to_constraint()
            for fk in spec.removed_foreign_keys
        ],
        changed_foreign_keys=[fk.to_constraint() for fk in spec.changed_foreign_keys],
    )
    try:
        diff.validate()
    except InvalidArgumentError as e:
        raise SchemaDefinitionError(f"Inconsistent table diff: {e}") from e
    return diff


def load_table(path: Union[str, Path]) -> Table:
    """Load a table definition from a YAML file."""
    return table_from_dict(_load_yaml(path))


def load_table_diff(path: Union[str, Path]) -> TableDiff:
    """Load a table diff from a YAML file."""
    return table_diff_from_dict(_load_yaml(path))


def _load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    config_file = Path(path)
    if not config_file.exists():
        raise SchemaDefinitionError(f"Schema file not found: {path}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaDefinitionError(f"Invalid YAML in schema file: {e}") from e

    if not isinstance(data, dict):
        raise SchemaDefinitionError(f"Schema file must contain a mapping: {path}")
    return data


def _validate(model, data: Any, label: str):
    if not isinstance(data, dict):
        raise SchemaDefinitionError(f"A {label} definition must be a mapping")
    try:
        return model(**data)
    except ValidationError as e:
        raise SchemaDefinitionError(f"Invalid {label} definition: {e}") from e


def _by_name(assets) -> Dict[str, Any]:
    return {asset.name: asset for asset in assets}


def _removed_column(value: Union[str, ColumnSpec]) -> Column:
    # Only the name of a removed column is rendered
    if isinstance(value, str):
        return Column(value, ColumnType.STRING)
    return value.to_column()


__all__ = [
    "SchemaDefinitionError",
    "ColumnSpec",
    "IndexSpec",
    "UniqueConstraintSpec",
    "ForeignKeySpec",
    "TableSpec",
    "ColumnChangeSpec",
    "TableDiffSpec",
    "table_from_dict",
    "table_diff_from_dict",
    "load_table",
    "load_table_diff",
]
