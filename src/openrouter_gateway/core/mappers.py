"""Mappers between domain entities and the provider wire format.

The provider speaks the OpenAI-compatible chat completions schema: flat
snake_case sampling fields on the request, snake_case usage and finish
reasons on the response.

Key Mappers:
    - to_wire: ChatRequest -> request body dict
    - from_wire: response body dict -> ChatResponse

Note:
    Unset optional request fields are omitted from the payload. They are
    never serialized as null or zero.
"""

from __future__ import annotations

from typing import Any

from openrouter_gateway.domain.entities import (
    ChatRequest,
    ChatResponse,
    Choice,
    ChoiceMessage,
    Message,
    Tool,
    ToolCall,
    ToolCallFunction,
    Usage,
)
from openrouter_gateway.domain.exceptions import ResponseFormatError
from openrouter_gateway.domain.value_objects import (
    ModelParameters,
    ResponseFormat,
    ResponseFormatType,
)

# ============================================================================
# Request Mappers
# ============================================================================


def to_wire(request: ChatRequest, default_model: str) -> dict[str, Any]:
    """Convert a ChatRequest into the provider request body.

    Args:
        request: Validated chat request.
        default_model: Model used when the request does not name one.

    Returns:
        JSON-serializable request body for ``POST /chat/completions``.
    """
    payload: dict[str, Any] = {
        "messages": [message_to_wire(message) for message in request.messages],
        "model": request.model or default_model,
    }

    if request.response_format is not None:
        payload["response_format"] = response_format_to_wire(request.response_format)

    if request.parameters is not None:
        payload.update(parameters_to_wire(request.parameters))

    if request.tools:
        payload["tools"] = [tool_to_wire(tool) for tool in request.tools]
    if request.tool_choice:
        payload["tool_choice"] = request.tool_choice

    return payload


def message_to_wire(message: Message) -> dict[str, Any]:
    wire: dict[str, Any] = {"role": str(message.role), "content": message.content}
    if message.name is not None:
        wire["name"] = message.name
    if message.tool_call_id is not None:
        wire["tool_call_id"] = message.tool_call_id
    return wire


def parameters_to_wire(params: ModelParameters) -> dict[str, Any]:
    """Flatten sampling parameters into provider field names, dropping unset ones."""
    return {
        key: value
        for key, value in {
            "temperature": params.temperature,
            "max_tokens": params.max_tokens,
            "top_p": params.top_p,
            "frequency_penalty": params.frequency_penalty,
            "presence_penalty": params.presence_penalty,
            "stop": params.stop,
            "seed": params.seed,
        }.items()
        if value is not None
    }


def response_format_to_wire(response_format: ResponseFormat) -> dict[str, Any]:
    format_type = str(response_format.type)
    if format_type != ResponseFormatType.JSON_SCHEMA or response_format.json_schema is None:
        return {"type": format_type}

    json_schema = response_format.json_schema
    schema_wire: dict[str, Any] = {
        "name": json_schema.name,
        "schema": json_schema.schema,
        "strict": json_schema.strict,
    }
    if json_schema.description is not None:
        schema_wire["description"] = json_schema.description
    return {"type": format_type, "json_schema": schema_wire}


def tool_to_wire(tool: Tool) -> dict[str, Any]:
    return {
        "type": tool.type,
        "function": {
            "name": tool.function.name,
            "description": tool.function.description,
            "parameters": tool.function.parameters,
        },
    }


# ============================================================================
# Response Mappers
# ============================================================================


def from_wire(data: Any) -> ChatResponse:
    """Convert a provider response body into a ChatResponse.

    Args:
        data: Decoded JSON response body.

    Returns:
        ChatResponse mirroring the body, with usage defaulted to 0 and
        ``None`` content preserved.

    Raises:
        ResponseFormatError: If the body is not an object, ``choices`` is
            missing or not a list, ``choices`` is empty, a choice carries
            no message object, or a message's ``tool_calls`` is not a list
            of objects. The offending body is attached as ``details``.
    """
    if not isinstance(data, dict):
        raise ResponseFormatError(
            "Invalid response format: expected a JSON object", details=data
        )

    raw_choices = data.get("choices")
    if not isinstance(raw_choices, list):
        raise ResponseFormatError(
            "Invalid response format: missing choices array", details=data
        )
    if not raw_choices:
        raise ResponseFormatError(
            "Invalid response format: choices array is empty", details=data
        )

    choices = tuple(
        _choice_from_wire(raw, position, data) for position, raw in enumerate(raw_choices)
    )

    return ChatResponse(
        id=data.get("id", ""),
        model=data.get("model", ""),
        created=data.get("created", 0),
        choices=choices,
        usage=usage_from_wire(data.get("usage")),
    )


def usage_from_wire(raw: Any) -> Usage:
    """Map usage counters, treating anything missing as 0."""
    if not isinstance(raw, dict):
        return Usage()
    return Usage(
        prompt_tokens=raw.get("prompt_tokens") or 0,
        completion_tokens=raw.get("completion_tokens") or 0,
        total_tokens=raw.get("total_tokens") or 0,
    )


def tool_call_from_wire(raw: dict[str, Any]) -> ToolCall:
    function = raw.get("function") or {}
    return ToolCall(
        id=raw.get("id", ""),
        type=raw.get("type", "function"),
        function=ToolCallFunction(
            name=function.get("name", ""),
            arguments=function.get("arguments", ""),
        ),
    )


def _choice_from_wire(raw: Any, position: int, body: dict[str, Any]) -> Choice:
    message = raw.get("message") if isinstance(raw, dict) else None
    if not isinstance(message, dict):
        raise ResponseFormatError(
            f"Invalid response format: choice {position} has no message", details=body
        )

    raw_tool_calls = message.get("tool_calls")
    if raw_tool_calls is not None and not _is_tool_call_list(raw_tool_calls):
        raise ResponseFormatError(
            f"Invalid response format: choice {position} has malformed tool_calls", details=body
        )
    tool_calls = (
        tuple(tool_call_from_wire(call) for call in raw_tool_calls)
        if raw_tool_calls is not None
        else None
    )

    return Choice(
        index=raw.get("index", position),
        message=ChoiceMessage(
            role=message.get("role", "assistant"),
            content=message.get("content"),
            tool_calls=tool_calls,
        ),
        finish_reason=raw.get("finish_reason"),
    )


def _is_tool_call_list(raw: Any) -> bool:
    return isinstance(raw, list) and all(
        isinstance(call, dict) and isinstance(call.get("function") or {}, dict) for call in raw
    )


__all__ = [
    "from_wire",
    "message_to_wire",
    "parameters_to_wire",
    "response_format_to_wire",
    "to_wire",
    "tool_call_from_wire",
    "tool_to_wire",
    "usage_from_wire",
]
