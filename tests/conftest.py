"""
Pytest configuration and fixtures for OpenRouter gateway tests.
"""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from helpers import SleepRecorder

from openrouter_gateway import (
    ChatRequest,
    GatewayConfig,
    MetricsCollector,
    OpenRouterClient,
    RetryConfig,
    RetryPolicy,
    user_message,
)
from openrouter_gateway.core.config import get_settings


@pytest.fixture(autouse=True)
def reset_global_state():
    MetricsCollector.reset()
    get_settings.cache_clear()
    yield
    MetricsCollector.reset()
    get_settings.cache_clear()


@pytest.fixture
def gateway_config() -> GatewayConfig:
    return GatewayConfig(api_key="sk-test", retry_delay=0.01)


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def client_factory(gateway_config, sleep_recorder) -> Callable[..., OpenRouterClient]:
    """Build clients around a test transport with recorded, jitter-free backoff."""

    def _factory(transport: Any, config: GatewayConfig | None = None, **kwargs: Any):
        config = config or gateway_config
        kwargs.setdefault(
            "retry_policy",
            RetryPolicy(
                RetryConfig(
                    max_retries=config.max_retries,
                    base_delay=config.retry_delay,
                    max_jitter=0,
                ),
                sleep=sleep_recorder,
            ),
        )
        return OpenRouterClient(config, transport=transport, **kwargs)

    return _factory


@pytest.fixture
def simple_request() -> ChatRequest:
    return ChatRequest(messages=[user_message("Hello")])
