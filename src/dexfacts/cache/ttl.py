"""Time-bounded caching of single upstream values."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from dexfacts.clock import SYSTEM_CLOCK, Clock

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Any negative TTL keeps an existing value forever.
NEVER_REFETCH = -1
ALWAYS_REFETCH = 0


@dataclass(frozen=True)
class CachedValue(Generic[T]):
    """A fetched value with the wall-clock millisecond it was fetched at."""

    fetched_at_ms: int
    value: T

    def is_fresh(self, now_ms: int, ttl_ms: int) -> bool:
        if ttl_ms < 0:
            return True
        if ttl_ms == ALWAYS_REFETCH:
            return False
        return now_ms - self.fetched_at_ms <= ttl_ms


async def get_or_fetch(
    cached: CachedValue[T] | None,
    ttl_ms: int,
    fetch: Callable[[], Awaitable[T]],
    *,
    clock: Clock | None = None,
    force_refresh: bool = False,
) -> tuple[T, CachedValue[T]]:
    """
    Return the cached value while fresh, otherwise fetch and wrap a new one.

    A failing fetch propagates its error; the caller still holds ``cached``,
    so a failed refresh never clears a previously fetched value.

    Returns:
        Tuple of (value, cache entry to keep)
    """
    clock = clock or SYSTEM_CLOCK
    if cached is not None and not force_refresh and cached.is_fresh(clock.now_ms(), ttl_ms):
        return cached.value, cached

    value = await fetch()
    entry = CachedValue(fetched_at_ms=clock.now_ms(), value=value)
    return value, entry


class TTLCache(Generic[T]):
    """
    Owned cache slot for one upstream value.

    Each instance is a field of the object that fetches the value, constructed
    with an explicit TTL in milliseconds.
    """

    def __init__(self, name: str, ttl_ms: int, *, clock: Clock | None = None) -> None:
        self.name = name
        self.ttl_ms = ttl_ms
        self._clock = clock or SYSTEM_CLOCK
        self._entry: CachedValue[T] | None = None

    @property
    def entry(self) -> CachedValue[T] | None:
        return self._entry

    @property
    def is_fresh(self) -> bool:
        return self._entry is not None and self._entry.is_fresh(self._clock.now_ms(), self.ttl_ms)

    async def get(
        self,
        fetch: Callable[[], Awaitable[T]],
        *,
        force_refresh: bool = False,
    ) -> T:
        """Return the cached value or replace it with a fresh fetch."""
        previous = self._entry
        value, self._entry = await get_or_fetch(
            previous,
            self.ttl_ms,
            fetch,
            clock=self._clock,
            force_refresh=force_refresh,
        )
        if self._entry is previous:
            logger.debug(f"Cache hit for {self.name}")
        else:
            logger.info(f"Fetched {self.name}")
        return value

    def invalidate(self) -> None:
        self._entry = None
