"""Bounded concurrency throttle with instrumentation."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, replace
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

DEFAULT_MAX_CONCURRENT = 5


@dataclass(slots=True)
class ThrottleStats:
    """Snapshot of throttle metrics (timings in milliseconds)."""

    waiting: int = 0
    in_flight: int = 0
    max_in_flight: int = 0
    completed: int = 0
    failed: int = 0
    total_wait_time_ms: float = 0.0
    max_wait_time_ms: float = 0.0


class ConcurrencyThrottle:
    """Caps how many operations run at once.

    Callers over the ceiling suspend on an ``asyncio.Semaphore`` until a slot
    frees. The slot is released on every exit path: success, error or
    cancellation. Waiters are admitted in no guaranteed order.

    Counters are mutated only from the event loop thread, between awaits.
    """

    __slots__ = ("max_concurrent", "_semaphore", "_stats")

    def __init__(self, max_concurrent: int = DEFAULT_MAX_CONCURRENT) -> None:
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self.max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._stats = ThrottleStats()

    @asynccontextmanager
    async def slot(self, request_id: str | None = None) -> AsyncIterator[None]:
        """Hold one concurrency slot for the duration of the block.

        Example
        -------
        >>> throttle = ConcurrencyThrottle(max_concurrent=2)
        >>> async with throttle.slot("req-1"):
        ...     ...
        """

        queued_at = time.perf_counter()
        self._stats.waiting += 1
        try:
            await self._semaphore.acquire()
        finally:
            self._stats.waiting -= 1

        self._register_admission(queued_at)
        logger.debug(
            "slot_acquired id=%s in_flight=%d/%d",
            request_id,
            self._stats.in_flight,
            self.max_concurrent,
        )

        try:
            yield
        except BaseException:
            self._stats.failed += 1
            raise
        else:
            self._stats.completed += 1
        finally:
            self._stats.in_flight -= 1
            self._semaphore.release()
            logger.debug("slot_released id=%s", request_id)

    async def run(self, operation: Callable[[], Awaitable[_T]], request_id: str | None = None) -> _T:
        """Run ``operation`` inside a slot and return its result."""
        async with self.slot(request_id):
            return await operation()

    def get_stats(self) -> ThrottleStats:
        """Return a copy of the current throttle metrics."""
        return replace(self._stats)

    def get_config(self) -> dict[str, Any]:
        """Return throttle configuration for diagnostics."""
        return {"max_concurrent": self.max_concurrent}

    def _register_admission(self, queued_at: float) -> None:
        wait_time_ms = (time.perf_counter() - queued_at) * 1000
        self._stats.in_flight += 1
        self._stats.max_in_flight = max(self._stats.max_in_flight, self._stats.in_flight)
        self._stats.total_wait_time_ms += wait_time_ms
        self._stats.max_wait_time_ms = max(self._stats.max_wait_time_ms, wait_time_ms)


__all__ = ["DEFAULT_MAX_CONCURRENT", "ConcurrencyThrottle", "ThrottleStats"]
