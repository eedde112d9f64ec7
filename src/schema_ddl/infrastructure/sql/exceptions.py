"""
Exception hierarchy for SQL generation.

Every failure raised by the platform engine, the type services and the cache
profile derives from SchemaDDLError, so callers can catch the whole family
with a single except clause while still telling the categories apart.
"""

from typing import Any, Optional


class SchemaDDLError(Exception):
    """Base exception for all schema_ddl errors."""

    pass


class InvalidArgumentError(SchemaDDLError, ValueError):
    """
    Raised when the input model is malformed or empty.

    Examples: a table without columns, an unknown referential action, or a
    table diff that lists the same column in two categories.

    Args:
        message: Error description
        value: The offending value (optional)
    """

    def __init__(self, message: str, value: Optional[Any] = None):
        self.value = value
        if value is not None:
            message = f"{message} (value={value!r})"
        super().__init__(message)


class UnknownTypeError(SchemaDDLError):
    """Raised when a type alias or semantic type kind is not known."""

    def __init__(self, type_name: str, platform: Optional[str] = None):
        self.type_name = type_name
        self.platform = platform
        if platform:
            message = (
                f'Unknown database type "{type_name}" requested, '
                f'platform "{platform}" may not support it.'
            )
        else:
            message = f'Unknown column type "{type_name}" requested.'
        super().__init__(message)


class UnsupportedOperationError(SchemaDDLError):
    """
    Raised when a dialect cannot express the requested operation.

    Args:
        operation: Name of the unsupported operation
        platform: Name of the dialect
        detail: Optional extra context (e.g. the offending identifier)
    """

    def __init__(self, operation: str, platform: str, detail: Optional[str] = None):
        self.operation = operation
        self.platform = platform
        message = f'Operation "{operation}" is not supported by platform "{platform}".'
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)


class NoCacheKeyError(SchemaDDLError):
    """Raised when a cache key is requested before one was configured."""

    def __init__(self) -> None:
        super().__init__("No cache key was set.")


__all__ = [
    "SchemaDDLError",
    "InvalidArgumentError",
    "UnknownTypeError",
    "UnsupportedOperationError",
    "NoCacheKeyError",
]
