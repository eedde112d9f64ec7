"""Query result cache identity."""

from .query_cache_profile import QueryCacheProfile, ResultCache, stable_serialize

__all__ = ["QueryCacheProfile", "ResultCache", "stable_serialize"]
