"""Diff model: the delta between an existing table and a desired table.

Diffs are produced by an external comparator or built by hand. The platform
engine turns them into ALTER statements without modifying them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Union

from schema_ddl.infrastructure.sql.exceptions import InvalidArgumentError

from .asset import Identifier, NamedAsset
from .core import (
    COLUMN_PROPERTIES,
    Column,
    ForeignKeyConstraint,
    Index,
    UniqueConstraint,
)

# Changes that require the column type to be declared again
TYPE_PROPERTIES = frozenset({"type", "length", "precision", "scale", "fixed", "unsigned"})


@dataclass
class ColumnDiff:
    """Change of a single column; ``column`` is the new definition."""

    old_column_name: str
    column: Column
    changed_properties: FrozenSet[str] = frozenset()
    from_column: Optional[Column] = None

    def __post_init__(self) -> None:
        self.changed_properties = frozenset(self.changed_properties)
        unknown = self.changed_properties - COLUMN_PROPERTIES
        if unknown:
            raise InvalidArgumentError(
                f"Unknown changed column properties for '{self.old_column_name}'",
                sorted(unknown),
            )

    def has_changed(self, prop: str) -> bool:
        return prop in self.changed_properties

    def requires_type_change(self) -> bool:
        return bool(self.changed_properties & TYPE_PROPERTIES)

    @property
    def old_identifier(self) -> Identifier:
        return Identifier.parse(self.old_column_name)

    def is_rename(self) -> bool:
        return self.old_identifier.key != self.column.identifier.key


ForeignKeyRef = Union[ForeignKeyConstraint, str]


@dataclass
class TableDiff(NamedAsset):
    """
    Precomputed delta for one table.

    Column maps are keyed by the old column name. ``renamed_columns`` maps an
    old column name to its new Column, ``renamed_indexes`` an old index name
    to the new Index definition. Foreign keys may be removed by name.
    """

    name: str
    new_name: Optional[str] = None
    added_columns: Dict[str, Column] = field(default_factory=dict)
    removed_columns: Dict[str, Column] = field(default_factory=dict)
    changed_columns: Dict[str, ColumnDiff] = field(default_factory=dict)
    renamed_columns: Dict[str, Column] = field(default_factory=dict)
    added_indexes: Dict[str, Index] = field(default_factory=dict)
    removed_indexes: Dict[str, Index] = field(default_factory=dict)
    changed_indexes: Dict[str, Index] = field(default_factory=dict)
    renamed_indexes: Dict[str, Index] = field(default_factory=dict)
    added_unique_constraints: Dict[str, UniqueConstraint] = field(default_factory=dict)
    removed_unique_constraints: Dict[str, UniqueConstraint] = field(default_factory=dict)
    changed_unique_constraints: Dict[str, UniqueConstraint] = field(default_factory=dict)
    added_foreign_keys: List[ForeignKeyConstraint] = field(default_factory=list)
    removed_foreign_keys: List[ForeignKeyRef] = field(default_factory=list)
    changed_foreign_keys: List[ForeignKeyConstraint] = field(default_factory=list)

    @property
    def new_identifier(self) -> Optional[Identifier]:
        if self.new_name is None:
            return None
        return Identifier.parse(self.new_name)

    def is_empty(self) -> bool:
        return not any(
            (
                self.new_name,
                self.added_columns,
                self.removed_columns,
                self.changed_columns,
                self.renamed_columns,
                self.added_indexes,
                self.removed_indexes,
                self.changed_indexes,
                self.renamed_indexes,
                self.added_unique_constraints,
                self.removed_unique_constraints,
                self.changed_unique_constraints,
                self.added_foreign_keys,
                self.removed_foreign_keys,
                self.changed_foreign_keys,
            )
        )

    def validate(self) -> None:
        """Reject diffs that list one key in two maps of the same category."""
        _assert_disjoint(
            "column",
            {
                "added": self.added_columns,
                "removed": self.removed_columns,
                "changed": self.changed_columns,
                "renamed": self.renamed_columns,
            },
        )
        # A removed index may also be a rename source; the rename replaces it
        _assert_disjoint(
            "index",
            {
                "added": self.added_indexes,
                "removed": self.removed_indexes,
                "changed": self.changed_indexes,
            },
        )
        _assert_disjoint(
            "index",
            {
                "added": self.added_indexes,
                "changed": self.changed_indexes,
                "renamed": self.renamed_indexes,
            },
        )
        _assert_disjoint(
            "unique constraint",
            {
                "added": self.added_unique_constraints,
                "removed": self.removed_unique_constraints,
                "changed": self.changed_unique_constraints,
            },
        )


def _assert_disjoint(category: str, maps: Dict[str, Iterable[str]]) -> None:
    seen: Dict[str, str] = {}
    for map_name, keys in maps.items():
        for key in keys:
            normalized = Identifier.parse(key).key
            if normalized in seen:
                raise InvalidArgumentError(
                    f"The {category} '{key}' is both {seen[normalized]} and "
                    f"{map_name} in the same table diff"
                )
            seen[normalized] = map_name


__all__ = ["ColumnDiff", "TableDiff", "TYPE_PROPERTIES"]
