"""Shared utilities."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any

__all__ = [
    "get_logger",
    "bind_context",
    "sanitize_for_logging",
]

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from .logging import bind_context, get_logger, sanitize_for_logging


def __getattr__(name: str) -> Any:
    if name in __all__:
        module = importlib.import_module(".logging", __name__)
        return getattr(module, name)
    raise AttributeError(f"module 'schema_ddl.utils' has no attribute {name!r}")
