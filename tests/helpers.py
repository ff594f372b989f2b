"""Reusable test doubles for OpenRouter gateway tests."""

from __future__ import annotations

import asyncio
from typing import Any


def make_wire_response(content: str | None = "Hello!", **overrides: Any) -> dict[str, Any]:
    """Build a provider response body with one choice."""
    body: dict[str, Any] = {
        "id": "gen-123",
        "model": "openai/gpt-4o-mini",
        "created": 1_700_000_000,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }
    body.update(overrides)
    return body


class FakeTransport:
    """Scripted transport.

    Each call pops the next outcome: a dict is returned, an exception is
    raised. When the script runs out, the last outcome repeats.
    """

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes) or [make_wire_response()]
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    async def execute(
        self,
        url: str,
        body: dict[str, Any],
        headers: dict[str, str],
        timeout: float,
    ) -> Any:
        self.calls.append({"url": url, "body": body, "headers": headers, "timeout": timeout})
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True


class GatedTransport:
    """Transport that holds every call until ``release`` is set.

    Tracks how many calls are executing at once.
    """

    def __init__(self, response: dict[str, Any] | None = None) -> None:
        self.response = response or make_wire_response()
        self.release = asyncio.Event()
        self.active = 0
        self.max_active = 0
        self.calls = 0

    async def execute(
        self,
        url: str,
        body: dict[str, Any],
        headers: dict[str, str],
        timeout: float,
    ) -> Any:
        self.calls += 1
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await self.release.wait()
            return self.response
        finally:
            self.active -= 1

    async def close(self) -> None:
        return None


class SleepRecorder:
    """Awaitable stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


async def wait_until(predicate, timeout: float = 1.0) -> None:
    """Yield to the event loop until ``predicate()`` holds."""
    async with asyncio.timeout(timeout):
        while not predicate():
            await asyncio.sleep(0)
