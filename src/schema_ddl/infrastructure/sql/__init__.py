"""
SQL module for dialect-aware DDL generation.

This module provides identifier quoting, type declarations, dialect rule sets
and the Platform engine that turns schema models into SQL statements.

Exports are resolved lazily so schema models can import the exception module
without loading the engine.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any

_EXPORTS = {
    "Platform": ".platform",
    "get_platform": ".platform",
    "Dialect": ".dialects",
    "get_dialect": ".dialects",
    "list_dialects": ".dialects",
    "SchemaEvent": ".events",
    "SchemaEventArgs": ".events",
    "ListenerRegistry": ".events",
    "SchemaDDLError": ".exceptions",
    "InvalidArgumentError": ".exceptions",
    "UnknownTypeError": ".exceptions",
    "UnsupportedOperationError": ".exceptions",
    "NoCacheKeyError": ".exceptions",
}

__all__ = list(_EXPORTS)

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from .dialects import Dialect, get_dialect, list_dialects
    from .events import ListenerRegistry, SchemaEvent, SchemaEventArgs
    from .exceptions import (
        InvalidArgumentError,
        NoCacheKeyError,
        SchemaDDLError,
        UnknownTypeError,
        UnsupportedOperationError,
    )
    from .platform import Platform, get_platform


def __getattr__(name: str) -> Any:
    if name in _EXPORTS:
        module = importlib.import_module(_EXPORTS[name], __name__)
        return getattr(module, name)
    raise AttributeError(f"module 'schema_ddl.infrastructure.sql' has no attribute {name!r}")
