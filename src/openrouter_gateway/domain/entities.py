"""Domain entities for the OpenRouter gateway client.

Pure request/response models with no I/O and no framework dependencies.
Entities are created per call and discarded once the call completes.

Key Entities:
    - Message: One conversation turn sent to the model
    - Tool/ToolFunction: Function-calling definitions
    - ChatRequest: Everything needed for one chat completion
    - ToolCall/ChoiceMessage/Choice/Usage/ChatResponse: Provider result
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from openrouter_gateway.domain.value_objects import ModelParameters, ResponseFormat

VALID_ROLES = frozenset({"system", "user", "assistant", "tool"})
"""Message roles accepted in a request."""

Role = Literal["system", "user", "assistant", "tool"]
FinishReason = Literal["stop", "length", "tool_calls", "content_filter", "error"]
ToolChoice = Literal["none", "auto", "required"] | dict[str, Any]


@dataclass(slots=True, frozen=True)
class Message:
    """A single conversation message.

    Attributes:
        role: One of ``VALID_ROLES``. Checked by the request validator, not
            here, so that validation rules are reported in order.
        content: Message text. May be empty, never None.
        name: Optional author name (tool messages).
        tool_call_id: Tool call this message answers (tool messages).
    """

    role: Role | str
    content: str
    name: str | None = None
    tool_call_id: str | None = None


@dataclass(slots=True, frozen=True)
class ToolFunction:
    """Function definition exposed to the model."""

    name: str
    description: str
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class Tool:
    """Tool definition for function calling. Only ``function`` is supported."""

    function: ToolFunction
    type: str = "function"


@dataclass(slots=True, frozen=True)
class ToolCallFunction:
    """Function invocation requested by the model.

    Attributes:
        name: Name of the function to call.
        arguments: JSON-encoded argument object, exactly as returned.
    """

    name: str
    arguments: str


@dataclass(slots=True, frozen=True)
class ToolCall:
    """Tool call emitted by the model in a response choice."""

    id: str
    function: ToolCallFunction
    type: str = "function"


@dataclass(slots=True, frozen=True)
class ChatRequest:
    """Chat completion request.

    Attributes:
        messages: Non-empty ordered conversation.
        model: Model identifier. None falls back to the client default.
        response_format: Optional structured output request.
        parameters: Optional sampling parameters.
        tools: Optional function-calling tools.
        tool_choice: ``"none"``, ``"auto"``, ``"required"`` or a
            ``{"type": "function", "function": {"name": ...}}`` object.
    """

    messages: tuple[Message, ...] | list[Message]
    model: str | None = None
    response_format: ResponseFormat | None = None
    parameters: ModelParameters | None = None
    tools: tuple[Tool, ...] | list[Tool] | None = None
    tool_choice: ToolChoice | None = None


@dataclass(slots=True, frozen=True)
class ChoiceMessage:
    """Message carried by a response choice. ``content`` may be None."""

    role: str
    content: str | None
    tool_calls: tuple[ToolCall, ...] | None = None


@dataclass(slots=True, frozen=True)
class Choice:
    """One completion alternative returned by the provider."""

    index: int
    message: ChoiceMessage
    finish_reason: FinishReason | str | None


@dataclass(slots=True, frozen=True)
class Usage:
    """Token accounting. Missing upstream values default to 0."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass(slots=True, frozen=True)
class ChatResponse:
    """Chat completion result.

    Attributes:
        id: Provider completion identifier.
        model: Model that produced the completion.
        created: Creation time in epoch seconds.
        choices: Non-empty ordered choices.
        usage: Token usage.
    """

    id: str
    model: str
    created: int
    choices: tuple[Choice, ...]
    usage: Usage

    @property
    def content(self) -> str | None:
        """Content of the first choice, the part calling services consume."""
        return self.choices[0].message.content


__all__ = [
    "VALID_ROLES",
    "ChatRequest",
    "ChatResponse",
    "Choice",
    "ChoiceMessage",
    "FinishReason",
    "Message",
    "Role",
    "Tool",
    "ToolCall",
    "ToolCallFunction",
    "ToolChoice",
    "ToolFunction",
    "Usage",
]
