"""Request validation performed before any network activity.

Rules are checked in a fixed order and the first failure wins:

1. messages must be non-empty
2. every message role must be allowed
3. a model must be resolvable from the request or the client default
4. sampling parameters must be within range
5. a json_schema response format must carry a usable schema
6. tools must be well-formed function tools
"""

from __future__ import annotations

import json
from typing import Any

from openrouter_gateway.domain.entities import VALID_ROLES, ChatRequest, Tool
from openrouter_gateway.domain.exceptions import RequestValidationError
from openrouter_gateway.domain.value_objects import (
    JSON_SCHEMA_MAX_CHARS,
    ModelParameters,
    ResponseFormatType,
)

TEMPERATURE_RANGE = (0.0, 2.0)
TOP_P_RANGE = (0.0, 1.0)
PENALTY_RANGE = (-2.0, 2.0)


def validate_request(request: ChatRequest, default_model: str | None = None) -> None:
    """Validate a chat request.

    Args:
        request: Request to check.
        default_model: Client default used when the request names no model.

    Raises:
        RequestValidationError: On the first violated rule.
    """
    if not request.messages:
        raise RequestValidationError("Messages array cannot be empty")

    for message in request.messages:
        if message.role not in VALID_ROLES:
            raise RequestValidationError(f"Invalid message role: {message.role}")

    if not request.model and not default_model:
        raise RequestValidationError("Model must be specified in request or config")

    if request.parameters is not None:
        _validate_parameters(request.parameters)

    response_format = request.response_format
    if response_format is not None and response_format.type == ResponseFormatType.JSON_SCHEMA:
        schema = response_format.json_schema.schema if response_format.json_schema else None
        validate_json_schema(schema)

    if request.tools:
        for tool in request.tools:
            _validate_tool(tool)


def validate_json_schema(schema: dict[str, Any] | None) -> None:
    """Check that a structured-output schema is present, small and well-formed.

    Raises:
        RequestValidationError: If the schema is missing, larger than
            ``JSON_SCHEMA_MAX_CHARS`` once serialized, or lacks ``type`` or
            ``properties``.
    """
    if schema is None or not isinstance(schema, dict):
        raise RequestValidationError(
            "JSON schema is required when using json_schema response format"
        )

    try:
        serialized = json.dumps(schema, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise RequestValidationError("JSON schema must be JSON serializable") from exc

    if len(serialized) > JSON_SCHEMA_MAX_CHARS:
        raise RequestValidationError("JSON schema too large (max 50KB)")

    if not schema.get("type") or not schema.get("properties"):
        raise RequestValidationError(
            "Invalid JSON schema structure: must have type and properties"
        )


def _validate_parameters(params: ModelParameters) -> None:
    _check_range(params.temperature, TEMPERATURE_RANGE, "Temperature")
    _check_range(params.top_p, TOP_P_RANGE, "topP")
    _check_range(params.frequency_penalty, PENALTY_RANGE, "frequencyPenalty")
    _check_range(params.presence_penalty, PENALTY_RANGE, "presencePenalty")

    if params.max_tokens is not None and params.max_tokens < 1:
        raise RequestValidationError("maxTokens must be greater than 0")


def _check_range(value: float | None, bounds: tuple[float, float], field_name: str) -> None:
    if value is None:
        return
    low, high = bounds
    if not low <= value <= high:
        raise RequestValidationError(f"{field_name} must be between {low} and {high}")


def _validate_tool(tool: Tool) -> None:
    if tool.type != "function":
        raise RequestValidationError(f"Invalid tool type: {tool.type}")
    function = tool.function
    if function is None or not function.name or not function.description:
        raise RequestValidationError("Tool function must have name and description")


__all__ = ["validate_json_schema", "validate_request"]
