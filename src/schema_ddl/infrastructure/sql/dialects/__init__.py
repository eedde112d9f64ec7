"""
SQL dialect rule sets.

Each supported database is described by a Dialect data object; the shared
Platform engine interprets it.
"""

from typing import Dict, List

from schema_ddl.infrastructure.sql.exceptions import InvalidArgumentError

from .base import GRANULAR, REDEFINE, Dialect
from .mysql import MYSQL
from .postgresql import POSTGRESQL
from .sqlite import SQLITE

_DIALECTS: Dict[str, Dialect] = {
    POSTGRESQL.name: POSTGRESQL,
    MYSQL.name: MYSQL,
    SQLITE.name: SQLITE,
}

# Common spellings accepted by get_dialect()
_DIALECT_ALIASES = {
    "postgres": "postgresql",
    "pg": "postgresql",
    "mariadb": "mysql",
    "sqlite3": "sqlite",
}


def get_dialect(name: str) -> Dialect:
    """
    Look up a dialect by name (case-insensitive).

    Raises:
        InvalidArgumentError: If no dialect with that name exists
    """
    key = name.strip().lower()
    key = _DIALECT_ALIASES.get(key, key)
    if key not in _DIALECTS:
        raise InvalidArgumentError(
            f"Unknown SQL dialect, expected one of {list_dialects()}", name
        )
    return _DIALECTS[key]


def list_dialects() -> List[str]:
    """Names of all supported dialects, sorted."""
    return sorted(_DIALECTS)


__all__ = [
    "Dialect",
    "GRANULAR",
    "REDEFINE",
    "POSTGRESQL",
    "MYSQL",
    "SQLITE",
    "get_dialect",
    "list_dialects",
]
