"""OpenRouter Gateway - resilient async client for the OpenRouter chat API."""

from openrouter_gateway.client import GatewayConfig, OpenRouterClient
from openrouter_gateway.core import (
    ConcurrencyThrottle,
    GatewaySettings,
    RetryConfig,
    RetryPolicy,
    ThrottleStats,
    get_settings,
    load_settings,
)
from openrouter_gateway.domain import (
    ChatRequest,
    ChatResponse,
    Choice,
    ChoiceMessage,
    ErrorKind,
    GatewayAPIError,
    GatewayConfigError,
    GatewayError,
    GatewayNetworkError,
    GatewayTimeoutError,
    JsonSchemaFormat,
    Message,
    ModelParameters,
    RequestValidationError,
    ResponseFormat,
    ResponseFormatError,
    ResponseFormatType,
    Tool,
    ToolCall,
    ToolCallFunction,
    ToolFunction,
    UnknownGatewayError,
    Usage,
    assistant_message,
    json_object_format,
    json_schema_format,
    system_message,
    user_message,
)
from openrouter_gateway.infrastructure import HttpxTransport
from openrouter_gateway.telemetry import MetricsCollector

__version__ = "0.1.0"

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "Choice",
    "ChoiceMessage",
    "ConcurrencyThrottle",
    "ErrorKind",
    "GatewayAPIError",
    "GatewayConfig",
    "GatewayConfigError",
    "GatewayError",
    "GatewayNetworkError",
    "GatewaySettings",
    "GatewayTimeoutError",
    "HttpxTransport",
    "JsonSchemaFormat",
    "Message",
    "MetricsCollector",
    "ModelParameters",
    "OpenRouterClient",
    "RequestValidationError",
    "ResponseFormat",
    "ResponseFormatError",
    "ResponseFormatType",
    "RetryConfig",
    "RetryPolicy",
    "ThrottleStats",
    "Tool",
    "ToolCall",
    "ToolCallFunction",
    "ToolFunction",
    "UnknownGatewayError",
    "Usage",
    "assistant_message",
    "get_settings",
    "json_object_format",
    "json_schema_format",
    "load_settings",
    "system_message",
    "user_message",
]
