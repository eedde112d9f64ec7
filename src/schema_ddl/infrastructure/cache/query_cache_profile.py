"""Query result cache profile.

Holds the cache settings of a query (lifetime, explicit key, cache handle) and
derives a deterministic identity for a query execution. The profile is
immutable: every setter returns a new instance.

Usage:
    >>> profile = QueryCacheProfile(lifetime=60)
    >>> short_key, long_key = profile.generate_cache_keys(
    ...     "SELECT * FROM users WHERE id = ?", [1], ["integer"], {"host": "db"}
    ... )
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, replace
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

from schema_ddl.infrastructure.sql.exceptions import NoCacheKeyError

Params = Union[Sequence[Any], Mapping[Any, Any]]


@runtime_checkable
class ResultCache(Protocol):
    """Minimal interface of a result cache backend."""

    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any, lifetime: int = 0) -> None: ...


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return value.hex()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return str(value)


def _sort_key(key: Any) -> Tuple[str, Any]:
    # Grouped by type so keys of different types are never compared
    if isinstance(key, (str, int, float)):
        return type(key).__name__, key
    return type(key).__name__, str(key)


def _key_text(key: Any) -> str:
    if isinstance(key, Enum):
        key = key.value
    if isinstance(key, str):
        return key
    if key is None or isinstance(key, (bool, int, float)):
        return json.dumps(key)
    return str(key)


def _canonicalize(value: Any) -> Any:
    """Order mapping keys so that positional and named keys can be mixed."""
    if isinstance(value, Mapping):
        return {
            _key_text(key): _canonicalize(item)
            for key, item in sorted(value.items(), key=lambda pair: _sort_key(pair[0]))
        }
    if isinstance(value, (list, tuple)):
        return [_canonicalize(item) for item in value]
    return value


def stable_serialize(value: Any) -> str:
    """
    Canonical JSON: sorted mapping keys, compact separators, UTF-8 kept.

    Mappings may mix integer and string keys; keys are grouped by type and
    sorted within each group.
    """
    return json.dumps(
        _canonicalize(value),
        separators=(",", ":"),
        ensure_ascii=False,
        default=_json_default,
    )


@dataclass(frozen=True)
class QueryCacheProfile:
    """
    Cache settings for one query.

    Attributes:
        lifetime: Seconds a cached result stays valid; 0 means no expiry
        cache_key: Explicit cache key overriding the generated one
        result_cache: Cache backend, if any
    """

    lifetime: int = 0
    cache_key: Optional[str] = None
    result_cache: Optional[ResultCache] = None

    def __post_init__(self) -> None:
        if self.result_cache is not None and not isinstance(self.result_cache, ResultCache):
            raise TypeError(
                f"result_cache must implement get() and set(), got "
                f"{type(self.result_cache).__name__}"
            )

    def get_cache_key(self) -> str:
        if self.cache_key is None:
            raise NoCacheKeyError()
        return self.cache_key

    def generate_cache_keys(
        self,
        sql: str,
        params: Optional[Params] = None,
        types: Optional[Params] = None,
        connection_params: Optional[Mapping[str, Any]] = None,
    ) -> Tuple[str, str]:
        """
        Derive the (short, long) cache keys of a query execution.

        The long key spells out every input; connection parameters enter it
        only as a SHA-256 digest so credentials never appear in the key. The
        short key is the explicit cache key or the SHA-1 digest of the long
        key.
        """
        connection_digest = hashlib.sha256(
            stable_serialize(connection_params or {}).encode("utf-8")
        ).hexdigest()
        long_key = (
            "query="
            + sql
            + "&params="
            + stable_serialize(params if params is not None else [])
            + "&types="
            + stable_serialize(types if types is not None else [])
            + "&connectionParams="
            + connection_digest
        )
        if self.cache_key is not None:
            short_key = self.cache_key
        else:
            short_key = hashlib.sha1(long_key.encode("utf-8")).hexdigest()
        return short_key, long_key

    def set_lifetime(self, lifetime: int) -> "QueryCacheProfile":
        return replace(self, lifetime=lifetime)

    def set_cache_key(self, cache_key: Optional[str]) -> "QueryCacheProfile":
        return replace(self, cache_key=cache_key)

    def set_result_cache(self, result_cache: Optional[ResultCache]) -> "QueryCacheProfile":
        return replace(self, result_cache=result_cache)


__all__ = ["QueryCacheProfile", "ResultCache", "stable_serialize"]
