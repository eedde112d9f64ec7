"""
Database type alias registry.

Each Platform owns one registry, seeded from its dialect's built-in alias
table, so custom mappings never leak between platforms or tests. Writes swap
in a fresh mapping under a lock; reads use whatever mapping is current and
never block.
"""

import threading
from typing import Dict, List, Mapping, Union

from schema_ddl.infrastructure.schema.core import ColumnType
from schema_ddl.infrastructure.sql.exceptions import UnknownTypeError
from schema_ddl.utils.logging import get_logger

logger = get_logger(__name__)


class TypeRegistry:
    """Case-insensitive mapping of database type aliases to ColumnType."""

    def __init__(self, platform_name: str, builtin: Mapping[str, ColumnType]):
        self.platform_name = platform_name
        self._lock = threading.Lock()
        self._mapping: Dict[str, ColumnType] = {
            alias.lower(): kind for alias, kind in builtin.items()
        }

    def get(self, alias: str) -> ColumnType:
        """
        Resolve an alias.

        Raises:
            UnknownTypeError: If the alias is not registered
        """
        try:
            return self._mapping[alias.lower()]
        except KeyError:
            raise UnknownTypeError(alias, self.platform_name) from None

    def has(self, alias: str) -> bool:
        return alias.lower() in self._mapping

    def register(self, alias: str, kind: Union[ColumnType, str]) -> None:
        """
        Map an alias to a semantic type, replacing any previous mapping.

        Raises:
            UnknownTypeError: If kind is not a known column type
        """
        column_type = ColumnType.coerce(kind)
        with self._lock:
            mapping = dict(self._mapping)
            mapping[alias.lower()] = column_type
            self._mapping = mapping
        logger.debug(
            "type_mapping_registered",
            platform=self.platform_name,
            alias=alias,
            column_type=column_type.value,
        )

    def aliases(self) -> List[str]:
        return sorted(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)


__all__ = ["TypeRegistry"]
