"""Gateway error taxonomy.

Every failure surfaced by the gateway client is one of a closed set of
``GatewayError`` variants. Each variant carries a ``kind`` tag so callers can
``match`` on it, plus only the fields that make sense for that variant
(status code and provider error type for API errors, nothing extra for
validation errors).

Exception Hierarchy:
    - GatewayError: Base exception for all gateway errors
    - GatewayConfigError: Invalid or missing client configuration
    - RequestValidationError: Request rejected before any network call
    - GatewayNetworkError: Connection never reached the provider
    - GatewayTimeoutError: Attempt exceeded its deadline
    - GatewayAPIError: Provider answered with a non-2xx status
    - ResponseFormatError: Provider answered with an unusable body
    - UnknownGatewayError: Anything else
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Tag identifying a GatewayError variant."""

    CONFIG = "config_error"
    VALIDATION = "validation_error"
    NETWORK = "network_error"
    TIMEOUT = "timeout_error"
    API = "api_error"
    RESPONSE_FORMAT = "response_error"
    UNKNOWN = "unknown_error"


class GatewayError(Exception):
    """Base exception for all gateway errors.

    Should not be raised directly; use one of the variants below.

    Attributes:
        message: Human-readable description of the failure.
        details: Optional raw payload (provider error body, offending
            response) kept for triage.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, *, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly payload for structured logs."""
        payload: dict[str, Any] = {
            "error_type": self.kind.value,
            "error_message": self.message,
        }
        if self.details is not None:
            payload["details"] = self.details
        if self.__cause__ is not None:
            payload["cause"] = f"{self.__cause__.__class__.__name__}: {self.__cause__}"
        return payload

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class GatewayConfigError(GatewayError):
    """Raised when the client is constructed with invalid configuration."""

    kind = ErrorKind.CONFIG


class RequestValidationError(GatewayError):
    """Raised when a request is rejected before touching the network."""

    kind = ErrorKind.VALIDATION


class GatewayNetworkError(GatewayError):
    """Raised when the connection to the provider could not be made."""

    kind = ErrorKind.NETWORK


class GatewayTimeoutError(GatewayError):
    """Raised when a single attempt exceeds its deadline.

    Attributes:
        timeout: Deadline that was exceeded, in seconds.
    """

    kind = ErrorKind.TIMEOUT

    def __init__(self, message: str, *, timeout: float | None = None) -> None:
        super().__init__(message)
        self.timeout = timeout


class GatewayAPIError(GatewayError):
    """Raised when the provider returns a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the provider.
        provider_type: Error type reported in the provider's error body
            (``API_ERROR`` when the body carried none).
        details: The provider's ``error`` object, if it could be parsed.
    """

    kind = ErrorKind.API

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        provider_type: str | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message, details=details)
        self.status_code = status_code
        self.provider_type = provider_type

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["status_code"] = self.status_code
        payload["provider_type"] = self.provider_type
        return payload

    def __repr__(self) -> str:
        return f"GatewayAPIError({self.message!r}, status_code={self.status_code})"


class ResponseFormatError(GatewayError):
    """Raised when a response body does not have the expected structure."""

    kind = ErrorKind.RESPONSE_FORMAT


class UnknownGatewayError(GatewayError):
    """Raised for failures that fit no other variant."""

    kind = ErrorKind.UNKNOWN


__all__ = [
    "ErrorKind",
    "GatewayAPIError",
    "GatewayConfigError",
    "GatewayError",
    "GatewayNetworkError",
    "GatewayTimeoutError",
    "RequestValidationError",
    "ResponseFormatError",
    "UnknownGatewayError",
]
