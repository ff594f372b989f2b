"""Shorthand constructors for messages and response formats."""

from __future__ import annotations

from typing import Any

from openrouter_gateway.domain.entities import Message
from openrouter_gateway.domain.value_objects import (
    JsonSchemaFormat,
    ResponseFormat,
    ResponseFormatType,
)


def system_message(content: str) -> Message:
    return Message(role="system", content=content)


def user_message(content: str) -> Message:
    return Message(role="user", content=content)


def assistant_message(content: str) -> Message:
    return Message(role="assistant", content=content)


def json_object_format() -> ResponseFormat:
    return ResponseFormat(type=ResponseFormatType.JSON_OBJECT)


def json_schema_format(
    name: str,
    schema: dict[str, Any],
    *,
    description: str | None = None,
    strict: bool = True,
) -> ResponseFormat:
    """Build a json_schema response format.

    Args:
        name: Schema name.
        schema: JSON Schema object with ``type`` and ``properties``.
        description: Optional schema description.
        strict: Enforce strict schema adherence (default True).
    """
    return ResponseFormat(
        type=ResponseFormatType.JSON_SCHEMA,
        json_schema=JsonSchemaFormat(
            name=name,
            schema=schema,
            description=description,
            strict=strict,
        ),
    )


__all__ = [
    "assistant_message",
    "json_object_format",
    "json_schema_format",
    "system_message",
    "user_message",
]
