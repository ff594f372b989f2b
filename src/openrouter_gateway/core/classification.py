"""Failure classification for gateway calls.

``classify_error`` normalizes whatever an attempt raised into a GatewayError
variant, and ``is_retryable`` decides whether the retry loop may try again.
Nothing else in the package makes retry decisions.

Retryable:
    - Network errors (the connection never reached the provider)
    - API errors with status 429
    - API errors with status >= 500

Everything else is surfaced immediately, including timeouts.
"""

from __future__ import annotations

import json
from http import HTTPStatus

import httpx

from openrouter_gateway.domain.exceptions import (
    GatewayAPIError,
    GatewayError,
    GatewayNetworkError,
    GatewayTimeoutError,
    ResponseFormatError,
    UnknownGatewayError,
)

NETWORK_ERROR_MESSAGE = "Network error: Failed to connect to OpenRouter API"


def classify_error(exc: BaseException) -> GatewayError:
    """Map an exception raised by an attempt to a GatewayError.

    GatewayError instances are returned unchanged. Other exceptions are
    wrapped; the caller is expected to chain the original with
    ``raise classified from exc``.
    """
    match exc:
        case GatewayError():
            return exc
        case httpx.TimeoutException() | TimeoutError():
            return GatewayTimeoutError(f"Request timeout: {exc}" if str(exc) else "Request timeout")
        case httpx.HTTPStatusError():
            status_code = exc.response.status_code
            return GatewayAPIError(
                f"API request failed with status {status_code}",
                status_code=status_code,
                provider_type="API_ERROR",
            )
        case httpx.TransportError() | ConnectionError():
            return GatewayNetworkError(NETWORK_ERROR_MESSAGE)
        case json.JSONDecodeError():
            return ResponseFormatError("Invalid response format: body is not valid JSON")
        case _:
            return UnknownGatewayError(str(exc) or "Unknown error occurred")


def is_retryable(error: GatewayError) -> bool:
    """Return True if ``error`` may succeed when the attempt is repeated."""
    match error:
        case GatewayNetworkError():
            return True
        case GatewayAPIError(status_code=status_code):
            return (
                status_code == HTTPStatus.TOO_MANY_REQUESTS
                or status_code >= HTTPStatus.INTERNAL_SERVER_ERROR
            )
        case _:
            return False


__all__ = ["NETWORK_ERROR_MESSAGE", "classify_error", "is_retryable"]
