"""Retry policy (exponential backoff + additive jitter) for gateway calls."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeAlias, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from openrouter_gateway.core.classification import classify_error, is_retryable
from openrouter_gateway.domain.exceptions import GatewayError

logger = logging.getLogger(__name__)

_T = TypeVar("_T")
SleepFunc: TypeAlias = Callable[[float], Awaitable[Any]]


@dataclass(slots=True, frozen=True)
class RetryConfig:
    """Retry budget. Delays are in seconds.

    Attributes:
        max_retries: Retries after the first attempt (total attempts is
            ``max_retries + 1``).
        base_delay: Delay before the first retry; doubles on each retry.
        max_jitter: Upper bound (exclusive) of the uniform jitter added to
            every delay.
    """

    max_retries: int = 3
    base_delay: float = 1.0
    max_jitter: float = 1.0


def _is_retryable_failure(exc: BaseException) -> bool:
    return isinstance(exc, GatewayError) and is_retryable(exc)


async def _classified(operation: Callable[[], Awaitable[_T]]) -> _T:
    try:
        return await operation()
    except Exception as exc:
        error = classify_error(exc)
        if error is exc:
            raise
        raise error from exc


class RetryPolicy:
    """Runs an async operation with classified, backoff-driven retries.

    Attempt 0 runs immediately. After a failed attempt ``n`` the policy
    sleeps ``base_delay * 2**n + uniform(0, max_jitter)`` seconds, provided
    the classified error is retryable and the budget is not spent. The last
    classified error is raised once retries stop.
    """

    __slots__ = ("config", "_sleep")

    def __init__(self, config: RetryConfig | None = None, sleep: SleepFunc | None = None) -> None:
        """Initialize the policy.

        Args:
            config: Retry budget. None uses RetryConfig() (3 retries, 1s base).
            sleep: Awaitable sleep used between attempts. None uses
                ``asyncio.sleep``; tests inject a recorder.
        """
        self.config = config or RetryConfig()
        self._sleep = sleep or asyncio.sleep

    @property
    def max_attempts(self) -> int:
        return self.config.max_retries + 1

    async def run(self, operation: Callable[[], Awaitable[_T]]) -> _T:
        """Invoke ``operation`` until it succeeds or retries stop.

        Args:
            operation: Zero-argument coroutine factory. Called once per attempt.

        Returns:
            The operation's result.

        Raises:
            GatewayError: The classified error of the last attempt.
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.config.base_delay, exp_base=2)
            + wait_random(0, self.config.max_jitter),
            retry=retry_if_exception(_is_retryable_failure),
            before_sleep=self._log_retry,
            sleep=self._sleep,
            reraise=True,
        )
        return await retrying(_classified, operation)

    def _log_retry(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            "request_retry attempt=%d/%d delay_ms=%.0f error=%r",
            retry_state.attempt_number,
            self.config.max_retries,
            delay * 1000,
            error,
        )


async def run_with_retry(
    operation: Callable[[], Awaitable[_T]],
    *,
    max_retries: int = 3,
    base_delay: float = 1.0,
    sleep: SleepFunc | None = None,
) -> _T:
    """Functional shortcut for ``RetryPolicy(RetryConfig(...)).run(operation)``."""
    policy = RetryPolicy(RetryConfig(max_retries=max_retries, base_delay=base_delay), sleep=sleep)
    return await policy.run(operation)


__all__ = ["RetryConfig", "RetryPolicy", "run_with_retry"]
