"""Value objects for chat completion requests.

Immutable, identity-less values describing how a model should generate:
sampling parameters and the requested response format. Range checks live in
``core.validation`` so that every rule is reported in a fixed order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

JSON_SCHEMA_MAX_CHARS = 50_000
"""Maximum serialized size of a json_schema response format schema."""


class ResponseFormatType(StrEnum):
    """Response format variants understood by the provider."""

    TEXT = "text"
    JSON_OBJECT = "json_object"
    JSON_SCHEMA = "json_schema"


@dataclass(slots=True, frozen=True)
class ModelParameters:
    """Sampling parameters for a chat completion.

    Every field is optional. ``None`` means "not set" and the field is left
    out of the wire payload entirely.

    Attributes:
        temperature: Sampling temperature, 0.0 to 2.0.
        top_p: Nucleus sampling mass, 0.0 to 1.0.
        frequency_penalty: -2.0 to 2.0.
        presence_penalty: -2.0 to 2.0.
        max_tokens: Completion token limit, greater than 0.
        stop: Stop sequence or list of stop sequences.
        seed: Seed for reproducible sampling.
    """

    temperature: float | None = None
    top_p: float | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None
    max_tokens: int | None = None
    stop: str | list[str] | None = None
    seed: int | None = None


@dataclass(slots=True, frozen=True)
class JsonSchemaFormat:
    """Structured-output schema attached to a json_schema response format.

    Attributes:
        name: Schema name reported to the provider.
        schema: JSON Schema object. Must declare ``type`` and ``properties``.
        description: Optional schema description.
        strict: Whether the provider should enforce the schema strictly.
    """

    name: str
    schema: dict[str, Any] | None = None
    description: str | None = None
    strict: bool = True


@dataclass(slots=True, frozen=True)
class ResponseFormat:
    """Requested response format.

    ``json_schema`` is only meaningful when ``type`` is JSON_SCHEMA.
    """

    type: ResponseFormatType | str = ResponseFormatType.TEXT
    json_schema: JsonSchemaFormat | None = None


__all__ = [
    "JSON_SCHEMA_MAX_CHARS",
    "JsonSchemaFormat",
    "ModelParameters",
    "ResponseFormat",
    "ResponseFormatType",
]
