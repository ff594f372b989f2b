"""
Comprehensive behavioral tests for ConcurrencyThrottle.

Tests focus on real async behavior, concurrency, edge cases, and error handling.
No mocks - tests use real asyncio primitives.
"""

import asyncio

import pytest
from helpers import wait_until

from openrouter_gateway import ConcurrencyThrottle


class TestConcurrencyThrottle:
    """Comprehensive behavioral tests for ConcurrencyThrottle."""

    def test_default_configuration(self):
        throttle = ConcurrencyThrottle()
        assert throttle.max_concurrent == 5
        assert throttle.get_config() == {"max_concurrent": 5}

    def test_rejects_non_positive_limit(self):
        with pytest.raises(ValueError, match="at least 1"):
            ConcurrencyThrottle(max_concurrent=0)

    @pytest.mark.asyncio
    async def test_slot_releases_on_exit(self):
        throttle = ConcurrencyThrottle(max_concurrent=1)

        async with throttle.slot("req-1"):
            assert throttle.get_stats().in_flight == 1

        stats = throttle.get_stats()
        assert stats.in_flight == 0
        assert stats.completed == 1
        assert stats.failed == 0

    @pytest.mark.asyncio
    async def test_slot_releases_on_error(self):
        throttle = ConcurrencyThrottle(max_concurrent=1)

        with pytest.raises(RuntimeError):
            async with throttle.slot("req-1"):
                raise RuntimeError("boom")

        stats = throttle.get_stats()
        assert stats.in_flight == 0
        assert stats.failed == 1

        # Slot is reusable after the failure
        async with throttle.slot("req-2"):
            pass
        assert throttle.get_stats().completed == 1

    @pytest.mark.asyncio
    async def test_concurrent_operations_respect_limit(self):
        throttle = ConcurrencyThrottle(max_concurrent=2)
        release = asyncio.Event()
        active = 0
        peak = 0

        async def worker():
            nonlocal active, peak
            async with throttle.slot():
                active += 1
                peak = max(peak, active)
                await release.wait()
                active -= 1

        tasks = [asyncio.create_task(worker()) for _ in range(5)]
        await wait_until(lambda: throttle.get_stats().waiting == 3)

        stats = throttle.get_stats()
        assert stats.in_flight == 2
        assert stats.waiting == 3

        release.set()
        await asyncio.gather(*tasks)

        stats = throttle.get_stats()
        assert peak == 2
        assert stats.max_in_flight == 2
        assert stats.completed == 5
        assert stats.in_flight == 0
        assert stats.waiting == 0

    @pytest.mark.asyncio
    async def test_waiter_admitted_when_slot_frees(self):
        throttle = ConcurrencyThrottle(max_concurrent=1)
        release_first = asyncio.Event()
        order = []

        async def first():
            async with throttle.slot("first"):
                order.append("first-start")
                await release_first.wait()
                order.append("first-end")

        async def second():
            async with throttle.slot("second"):
                order.append("second-start")

        t1 = asyncio.create_task(first())
        await wait_until(lambda: throttle.get_stats().in_flight == 1)
        t2 = asyncio.create_task(second())
        await wait_until(lambda: throttle.get_stats().waiting == 1)

        assert order == ["first-start"]
        release_first.set()
        await asyncio.gather(t1, t2)

        assert order == ["first-start", "first-end", "second-start"]
        assert throttle.get_stats().max_wait_time_ms > 0

    @pytest.mark.asyncio
    async def test_cancelled_waiter_does_not_leak(self):
        throttle = ConcurrencyThrottle(max_concurrent=1)
        release = asyncio.Event()

        async def holder():
            async with throttle.slot("holder"):
                await release.wait()

        async def waiter():
            async with throttle.slot("waiter"):
                pass

        holding = asyncio.create_task(holder())
        await wait_until(lambda: throttle.get_stats().in_flight == 1)
        waiting = asyncio.create_task(waiter())
        await wait_until(lambda: throttle.get_stats().waiting == 1)

        waiting.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiting

        assert throttle.get_stats().waiting == 0
        release.set()
        await holding

        # Full capacity is available again
        async with throttle.slot("after"):
            assert throttle.get_stats().in_flight == 1
        assert throttle.get_stats().in_flight == 0

    @pytest.mark.asyncio
    async def test_run_returns_operation_result(self):
        throttle = ConcurrencyThrottle(max_concurrent=1)

        async def operation():
            return 42

        assert await throttle.run(operation, request_id="req-1") == 42
        assert throttle.get_stats().completed == 1

    @pytest.mark.asyncio
    async def test_get_stats_returns_snapshot(self):
        throttle = ConcurrencyThrottle(max_concurrent=1)
        snapshot = throttle.get_stats()

        async with throttle.slot():
            pass

        assert snapshot.completed == 0
        assert throttle.get_stats().completed == 1
