"""Time source abstraction so caches and retries can be tested deterministically."""

from __future__ import annotations

import asyncio
import time
from typing import Protocol


class Clock(Protocol):
    """Wall-clock milliseconds plus a cooperative sleep."""

    def now_ms(self) -> int: ...

    async def sleep(self, millis: float) -> None: ...


class SystemClock:
    """Clock backed by ``time.time`` and ``asyncio.sleep``."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)

    async def sleep(self, millis: float) -> None:
        await asyncio.sleep(millis / 1000)


SYSTEM_CLOCK: Clock = SystemClock()
