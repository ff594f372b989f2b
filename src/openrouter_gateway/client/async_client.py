"""Asynchronous gateway client for the OpenRouter chat completions API.

This module wires the gateway pipeline together behind a single entry point,
``OpenRouterClient.send``:

    validate -> to_wire -> throttle slot { retry { transport } -> from_wire }

Key behaviors:
    - Validation runs before the throttle or the network is touched
    - At most ``max_concurrent_requests`` calls are in flight at once; a
      call's own retries reuse its slot
    - Network, 429 and 5xx failures are retried with exponential backoff and
      jitter; everything else is surfaced immediately
    - Every call records a metric and emits one structured request event

Concurrency:
    - All waits (slot, backoff, network) are non-blocking asyncio waits
    - Safe for concurrent use from many tasks on one event loop
"""

from __future__ import annotations

import logging
import time
import types
import uuid
from dataclasses import dataclass, field
from typing import Any

from openrouter_gateway.application.interfaces import TransportInterface
from openrouter_gateway.core.config import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    GatewaySettings,
    get_settings,
)
from openrouter_gateway.core.mappers import from_wire, to_wire
from openrouter_gateway.core.queue import DEFAULT_MAX_CONCURRENT, ConcurrencyThrottle
from openrouter_gateway.core.resilience import RetryConfig, RetryPolicy
from openrouter_gateway.core.validation import validate_request
from openrouter_gateway.domain.entities import ChatRequest, ChatResponse
from openrouter_gateway.domain.exceptions import GatewayConfigError, GatewayError
from openrouter_gateway.infrastructure.transport import HttpxTransport
from openrouter_gateway.telemetry.metrics import MetricsCollector
from openrouter_gateway.telemetry.structured_logging import (
    configure_request_log,
    log_request_event,
)

logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_PATH = "/chat/completions"


@dataclass(slots=True, frozen=True)
class GatewayConfig:
    """Immutable, fully resolved client configuration.

    All time values are in seconds.

    Attributes:
        api_key: Provider API key. Required.
        base_url: API base URL (default: "https://openrouter.ai/api/v1").
        default_model: Model used when a request names none.
        timeout: Per-attempt deadline (default: 30).
        max_retries: Retries after the first attempt (default: 3).
        retry_delay: Base backoff delay (default: 1.0).
        max_concurrent_requests: In-flight ceiling (default: 5).
        app_name: Sent as ``X-Title`` when non-empty.
        site_url: Sent as ``HTTP-Referer`` when non-empty.

    Raises:
        GatewayConfigError: If the API key is missing or a value is out of range.
    """

    api_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    default_model: str = DEFAULT_MODEL
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0
    max_concurrent_requests: int = DEFAULT_MAX_CONCURRENT
    app_name: str = ""
    site_url: str = ""

    def __post_init__(self) -> None:
        if not self.api_key:
            raise GatewayConfigError("API key is required")
        if not self.base_url.startswith(("http://", "https://")):
            raise GatewayConfigError("base_url must start with http:// or https://")
        if self.timeout <= 0:
            raise GatewayConfigError("timeout must be greater than 0")
        if self.max_retries < 0:
            raise GatewayConfigError("max_retries cannot be negative")
        if self.retry_delay < 0:
            raise GatewayConfigError("retry_delay cannot be negative")
        if self.max_concurrent_requests < 1:
            raise GatewayConfigError("max_concurrent_requests must be at least 1")

    @classmethod
    def from_settings(cls, settings: GatewaySettings) -> GatewayConfig:
        """Build a config from loaded settings."""
        return cls(
            api_key=settings.api_key or "",
            base_url=settings.base_url,
            default_model=settings.default_model,
            timeout=settings.timeout,
            max_retries=settings.max_retries,
            retry_delay=settings.retry_delay,
            max_concurrent_requests=settings.max_concurrent_requests,
            app_name=settings.app_name,
            site_url=settings.site_url,
        )

    @property
    def endpoint_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{CHAT_COMPLETIONS_PATH}"

    def build_headers(self) -> dict[str, str]:
        """Return request headers, including analytics headers when configured."""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if self.site_url:
            headers["HTTP-Referer"] = self.site_url
        if self.app_name:
            headers["X-Title"] = self.app_name
        return headers


class OpenRouterClient:
    """Resilient async client for OpenRouter chat completions.

    Construct once per process and share. Can be used as an async context
    manager to release the HTTP connection pool on exit.

    Attributes:
        config: Immutable client configuration.

    Lifecycle:
        - Headers are built once at construction and reused for every call
        - The HTTP pool is created lazily on the first call
        - Call close() or use the context manager to release it
    """

    __slots__ = ("_headers", "_retry_policy", "_throttle", "_transport", "config")

    def __init__(
        self,
        config: GatewayConfig,
        *,
        transport: TransportInterface | None = None,
        throttle: ConcurrencyThrottle | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client configuration.
            transport: HTTP transport. None uses HttpxTransport().
            throttle: Concurrency throttle. None builds one sized by
                ``config.max_concurrent_requests``.
            retry_policy: Retry policy. None builds one from
                ``config.max_retries`` and ``config.retry_delay``.

        Raises:
            GatewayConfigError: If ``config`` is missing.
        """
        if config is None:
            raise GatewayConfigError("config is required")
        self.config = config
        self._headers = config.build_headers()
        self._transport: TransportInterface = transport or HttpxTransport()
        self._throttle = throttle or ConcurrencyThrottle(config.max_concurrent_requests)
        self._retry_policy = retry_policy or RetryPolicy(
            RetryConfig(max_retries=config.max_retries, base_delay=config.retry_delay)
        )

    @classmethod
    def from_settings(
        cls,
        settings: GatewaySettings | None = None,
        **kwargs: Any,
    ) -> OpenRouterClient:
        """Build a client from settings (environment / config.toml by default).

        Also attaches the JSONL request log when ``request_log_path`` is set.

        Raises:
            GatewayConfigError: If no API key is configured.
        """
        if settings is None:
            settings = get_settings()
        config = GatewayConfig.from_settings(settings)
        if settings.request_log_path is not None:
            configure_request_log(settings.request_log_path)
        return cls(config, **kwargs)

    @property
    def throttle(self) -> ConcurrencyThrottle:
        return self._throttle

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    async def __aenter__(self) -> OpenRouterClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Release transport resources. Safe to call multiple times."""
        await self._transport.close()

    async def send(self, request: ChatRequest) -> ChatResponse:
        """Send a chat completion request.

        Args:
            request: Chat request. ``request.model`` falls back to
                ``config.default_model``.

        Returns:
            ChatResponse with at least one choice.

        Raises:
            RequestValidationError: Request rejected before any network call.
            GatewayAPIError: Non-retryable status, or retryable status after
                the retry budget is spent.
            GatewayNetworkError: Connection failures after the retry budget.
            GatewayTimeoutError: An attempt exceeded ``config.timeout``.
            ResponseFormatError: The provider body was unusable.

        Side effects:
            - Holds one throttle slot while the provider is being called
            - Records metrics via MetricsCollector
            - Emits one structured request event
        """
        request_id = str(uuid.uuid4())
        model = request.model or self.config.default_model
        start_time = time.perf_counter()

        try:
            validate_request(request, self.config.default_model)
            payload = to_wire(request, self.config.default_model)

            async with self._throttle.slot(request_id):
                data = await self._retry_policy.run(
                    lambda: self._transport.execute(
                        self.config.endpoint_url,
                        payload,
                        self._headers,
                        self.config.timeout,
                    )
                )
                response = from_wire(data)

        except GatewayError as exc:
            self._record_failure(request_id, model, start_time, exc)
            raise

        latency_ms = (time.perf_counter() - start_time) * 1000
        MetricsCollector.record_request(
            model=model,
            operation="chat",
            latency_ms=latency_ms,
            success=True,
        )
        log_request_event(
            {
                "event": "gateway_request",
                "operation": "chat",
                "status": "success",
                "request_id": request_id,
                "model": response.model or model,
                "latency_ms": round(latency_ms, 3),
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
                "finish_reason": response.choices[0].finish_reason,
            }
        )
        logger.info("request_completed id=%s model=%s latency_ms=%.2f", request_id, model, latency_ms)
        return response

    def _record_failure(
        self,
        request_id: str,
        model: str,
        start_time: float,
        error: GatewayError,
    ) -> None:
        latency_ms = (time.perf_counter() - start_time) * 1000
        MetricsCollector.record_request(
            model=model,
            operation="chat",
            latency_ms=latency_ms,
            success=False,
            error=error.kind.value,
        )
        event: dict[str, Any] = {
            "event": "gateway_request",
            "operation": "chat",
            "status": "error",
            "request_id": request_id,
            "model": model,
            "latency_ms": round(latency_ms, 3),
            "error_type": error.kind.value,
            "error_message": error.message,
        }
        status_code = getattr(error, "status_code", None)
        if status_code is not None:
            event["status_code"] = status_code
            event["provider_type"] = getattr(error, "provider_type", None)
        log_request_event(event)
        logger.warning(
            "request_failed id=%s model=%s error_type=%s message=%s",
            request_id,
            model,
            error.kind.value,
            error.message,
        )


__all__ = ["CHAT_COMPLETIONS_PATH", "GatewayConfig", "OpenRouterClient"]
