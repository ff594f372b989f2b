"""Core pipeline stages for the OpenRouter gateway client."""

from openrouter_gateway.core.classification import classify_error, is_retryable
from openrouter_gateway.core.config import GatewaySettings, get_settings, load_settings
from openrouter_gateway.core.mappers import from_wire, to_wire
from openrouter_gateway.core.queue import ConcurrencyThrottle, ThrottleStats
from openrouter_gateway.core.resilience import RetryConfig, RetryPolicy, run_with_retry
from openrouter_gateway.core.validation import validate_json_schema, validate_request

__all__ = [
    "ConcurrencyThrottle",
    "GatewaySettings",
    "RetryConfig",
    "RetryPolicy",
    "ThrottleStats",
    "classify_error",
    "from_wire",
    "get_settings",
    "is_retryable",
    "load_settings",
    "run_with_retry",
    "to_wire",
    "validate_json_schema",
    "validate_request",
]
