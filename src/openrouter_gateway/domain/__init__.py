"""Domain layer for the OpenRouter gateway client.

Request/response value objects and the gateway error taxonomy. No I/O and no
dependencies on outer layers.
"""

from openrouter_gateway.domain.entities import (
    VALID_ROLES,
    ChatRequest,
    ChatResponse,
    Choice,
    ChoiceMessage,
    Message,
    Tool,
    ToolCall,
    ToolCallFunction,
    ToolFunction,
    Usage,
)
from openrouter_gateway.domain.exceptions import (
    ErrorKind,
    GatewayAPIError,
    GatewayConfigError,
    GatewayError,
    GatewayNetworkError,
    GatewayTimeoutError,
    RequestValidationError,
    ResponseFormatError,
    UnknownGatewayError,
)
from openrouter_gateway.domain.factories import (
    assistant_message,
    json_object_format,
    json_schema_format,
    system_message,
    user_message,
)
from openrouter_gateway.domain.value_objects import (
    JSON_SCHEMA_MAX_CHARS,
    JsonSchemaFormat,
    ModelParameters,
    ResponseFormat,
    ResponseFormatType,
)

__all__ = [
    "JSON_SCHEMA_MAX_CHARS",
    "VALID_ROLES",
    "ChatRequest",
    "ChatResponse",
    "Choice",
    "ChoiceMessage",
    "ErrorKind",
    "GatewayAPIError",
    "GatewayConfigError",
    "GatewayError",
    "GatewayNetworkError",
    "GatewayTimeoutError",
    "JsonSchemaFormat",
    "Message",
    "ModelParameters",
    "RequestValidationError",
    "ResponseFormat",
    "ResponseFormatError",
    "ResponseFormatType",
    "Tool",
    "ToolCall",
    "ToolCallFunction",
    "ToolFunction",
    "UnknownGatewayError",
    "Usage",
    "assistant_message",
    "json_object_format",
    "json_schema_format",
    "system_message",
    "user_message",
]
