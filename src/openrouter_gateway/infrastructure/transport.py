"""HTTP transport for the OpenRouter gateway client.

Performs exactly one ``POST`` per call over a pooled ``httpx.AsyncClient``
and translates transport-level outcomes into gateway errors. Retries happen
one layer up, in the retry policy.

Key behaviors:
    - Whole attempt (connect, send, read, decode) bound by ``asyncio.timeout``
    - Non-2xx: provider ``{"error": {"message", "type"}}`` body parsed when
      possible, generic status message otherwise
    - Deadline exceeded -> GatewayTimeoutError
    - Connection-level failure -> GatewayNetworkError
    - 2xx body that is not JSON -> ResponseFormatError
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from openrouter_gateway.core.classification import NETWORK_ERROR_MESSAGE
from openrouter_gateway.domain.exceptions import (
    GatewayAPIError,
    GatewayNetworkError,
    GatewayTimeoutError,
    ResponseFormatError,
)

logger = logging.getLogger(__name__)

DEFAULT_API_ERROR_TYPE = "API_ERROR"


class HttpxTransport:
    """Single-shot HTTP transport backed by httpx.

    Attributes:
        client: httpx.AsyncClient instance (created lazily unless injected).

    Lifecycle:
        - The pooled client is created on first use
        - ``close()`` releases it when the transport created it
    """

    __slots__ = ("client", "_limits", "_owns_client")

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        limits: httpx.Limits | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            client: Pre-built httpx client. The transport does not close an
                injected client.
            limits: Connection pool limits for a lazily created client.
        """
        self.client = client
        self._owns_client = client is None
        self._limits = limits or httpx.Limits(max_connections=20, max_keepalive_connections=10)

    def _ensure_client(self) -> httpx.AsyncClient:
        if self.client is None:
            self.client = httpx.AsyncClient(limits=self._limits)
        return self.client

    async def execute(
        self,
        url: str,
        body: dict[str, Any],
        headers: dict[str, str],
        timeout: float,
    ) -> Any:
        """POST ``body`` to ``url`` under a ``timeout``-second deadline.

        Returns:
            Decoded JSON body of the 2xx response.

        Raises:
            GatewayAPIError: Non-2xx status.
            GatewayTimeoutError: Deadline exceeded.
            GatewayNetworkError: Connection failure.
            ResponseFormatError: 2xx body that is not valid JSON.
        """
        client = self._ensure_client()

        try:
            async with asyncio.timeout(timeout):
                response = await client.post(url, json=body, headers=headers, timeout=timeout)
                logger.debug("transport_response url=%s status=%d", url, response.status_code)

                if not response.is_success:
                    raise _api_error(response)

                try:
                    return response.json()
                except ValueError as exc:
                    raise ResponseFormatError(
                        "Invalid response format: body is not valid JSON",
                        details=response.text[:1000],
                    ) from exc

        except (TimeoutError, httpx.TimeoutException) as exc:
            raise GatewayTimeoutError(
                f"Request timeout after {timeout * 1000:.0f}ms", timeout=timeout
            ) from exc
        except httpx.TransportError as exc:
            raise GatewayNetworkError(NETWORK_ERROR_MESSAGE) from exc

    async def close(self) -> None:
        """Close the pooled client if this transport created it. Safe to call twice."""
        if self.client is not None and self._owns_client:
            await self.client.aclose()
            self.client = None


def _api_error(response: httpx.Response) -> GatewayAPIError:
    status_code = response.status_code
    error_body: dict[str, Any] = {}

    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        error_body = payload["error"]

    message = error_body.get("message") or f"API request failed with status {status_code}"
    provider_type = error_body.get("type") or DEFAULT_API_ERROR_TYPE

    return GatewayAPIError(
        str(message),
        status_code=status_code,
        provider_type=str(provider_type),
        details=error_body or None,
    )


__all__ = ["DEFAULT_API_ERROR_TYPE", "HttpxTransport"]
