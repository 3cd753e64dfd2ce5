"""Retry loops for idempotent upstream reads."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from dexfacts.clock import SYSTEM_CLOCK, Clock
from dexfacts.core.exceptions import UpstreamFetchError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_RETRY_INTERVAL_MS = 1000


async def retry_forever(
    name: str,
    operation: Callable[[], Awaitable[T]],
    interval_ms: float = DEFAULT_RETRY_INTERVAL_MS,
    *,
    clock: Clock | None = None,
) -> T:
    """
    Await ``operation`` until it succeeds, sleeping ``interval_ms`` between attempts.

    Failures are logged and never raised. Only use this for idempotent reads
    where blocking is preferable to giving up; there is no internal timeout, so
    callers abandon it by cancelling the enclosing task.

    Args:
        name: Operation name used in log messages
        operation: Zero-argument coroutine factory
        interval_ms: Delay between attempts in milliseconds
        clock: Time source (defaults to the system clock)

    Returns:
        The first successful result
    """
    clock = clock or SYSTEM_CLOCK
    attempt = 0
    while True:
        attempt += 1
        try:
            logger.debug(f"Request {name} through retry_forever (attempt {attempt})")
            return await operation()
        except Exception as e:
            logger.error(f"Request {name} failed, retry after {interval_ms} ms: {e!r}")
            await clock.sleep(interval_ms)


async def retry_bounded(
    name: str,
    operation: Callable[[], Awaitable[T]],
    max_attempts: int,
    interval_ms: float = DEFAULT_RETRY_INTERVAL_MS,
    *,
    clock: Clock | None = None,
) -> T:
    """
    Like :func:`retry_forever` but gives up after ``max_attempts`` failures.

    Raises:
        UpstreamFetchError: When every attempt failed; chained to the last error
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    clock = clock or SYSTEM_CLOCK
    last_error: Exception | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            logger.debug(f"Request {name} attempt {attempt}/{max_attempts}")
            return await operation()
        except Exception as e:
            last_error = e
            if attempt == max_attempts:
                break
            logger.error(f"Request {name} failed, retry after {interval_ms} ms: {e!r}")
            await clock.sleep(interval_ms)

    logger.error(f"Request {name} failed after {max_attempts} attempts: {last_error!r}")
    raise UpstreamFetchError(
        f"{name} failed after {max_attempts} attempts",
        attempts=max_attempts,
        details={"error": str(last_error)},
    ) from last_error
