"""Identifier, keyword and type declaration services."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any

__all__ = [
    "KeywordList",
    "quote_identifier",
    "quote_single_identifier",
    "quote_string_literal",
    "unquote_identifier",
    "requires_quoting",
    "TypeDeclarations",
    "TypeRegistry",
]

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from .identifier import (
        KeywordList,
        quote_identifier,
        quote_single_identifier,
        quote_string_literal,
        requires_quoting,
        unquote_identifier,
    )
    from .type_registry import TypeRegistry
    from .types import TypeDeclarations


def __getattr__(name: str) -> Any:
    if name in __all__:
        if name == "TypeDeclarations":
            module = importlib.import_module(".types", __name__)
        elif name == "TypeRegistry":
            module = importlib.import_module(".type_registry", __name__)
        else:
            module = importlib.import_module(".identifier", __name__)
        return getattr(module, name)
    raise AttributeError(
        f"module 'schema_ddl.infrastructure.sql.core' has no attribute {name!r}"
    )
