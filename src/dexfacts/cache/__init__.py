"""In-memory TTL caching of upstream values."""

from .ttl import ALWAYS_REFETCH, NEVER_REFETCH, CachedValue, TTLCache, get_or_fetch

__all__ = [
    "ALWAYS_REFETCH",
    "CachedValue",
    "NEVER_REFETCH",
    "TTLCache",
    "get_or_fetch",
]
