"""Response envelopes returned by create_chat_completion.

Exactly one of the two shapes is produced per call: ``StructuredResult`` when the
request carried a response schema, ``ChatCompletionResult`` otherwise. Both carry
a ``kind`` discriminator so callers branch explicitly instead of probing fields.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

from .chat_message import (
    AssistantMessage,
    ChatCompletionChoice,
    TokenUsage,
    ToolCall,
    ToolCallFunction,
)


@dataclass
class ChatCompletionResult:
    """Generic chat-completion-shaped envelope."""

    id: str
    created: int  # seconds since epoch
    model: str
    choices: list[ChatCompletionChoice]
    usage: TokenUsage = field(default_factory=TokenUsage)
    object: str = "chat.completion"
    kind: Literal["chat_completion"] = "chat_completion"

    @property
    def message(self) -> AssistantMessage:
        return self.choices[0].message


@dataclass
class StructuredResult:
    """Schema-mode envelope: the validated value plus token usage."""

    data: Any
    usage: TokenUsage = field(default_factory=TokenUsage)
    kind: Literal["structured"] = "structured"


ResponseEnvelope = ChatCompletionResult | StructuredResult


def envelope_to_dict(envelope: ResponseEnvelope) -> dict[str, Any]:
    """Convert an envelope to plain JSON-compatible data."""
    return asdict(envelope)


def envelope_from_dict(data: dict[str, Any]) -> ResponseEnvelope:
    """Rebuild an envelope produced by ``envelope_to_dict``.

    Raises:
        ValueError: If the ``kind`` discriminator is missing or unknown.
    """
    usage = TokenUsage(**data.get("usage", {}))
    kind = data.get("kind")

    if kind == "structured":
        return StructuredResult(data=data.get("data"), usage=usage)

    if kind == "chat_completion":
        choices = []
        for choice in data.get("choices", []):
            message = choice.get("message", {})
            tool_calls = [
                ToolCall(
                    id=tc["id"],
                    type=tc.get("type", "function"),
                    function=ToolCallFunction(**tc["function"]),
                )
                for tc in message.get("tool_calls", [])
            ]
            choices.append(
                ChatCompletionChoice(
                    index=choice.get("index", 0),
                    finish_reason=choice.get("finish_reason", "stop"),
                    message=AssistantMessage(
                        role=message.get("role", "assistant"),
                        content=message.get("content", ""),
                        tool_calls=tool_calls,
                    ),
                )
            )
        return ChatCompletionResult(
            id=data["id"],
            created=data["created"],
            model=data["model"],
            choices=choices,
            usage=usage,
            object=data.get("object", "chat.completion"),
        )

    raise ValueError(f"Unknown response envelope kind: {kind!r}")
