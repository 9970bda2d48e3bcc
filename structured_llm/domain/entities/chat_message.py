"""Domain entities for chat messages and completion requests: framework-independent, multimodal."""

from dataclasses import dataclass, field
from typing import Any, Literal

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class TextPart:
    """A text fragment within a multimodal message."""

    text: str
    kind: Literal["text"] = "text"


@dataclass(frozen=True)
class ImagePart:
    """An inline image within a multimodal message.

    ``data_uri`` is expected to look like ``data:image/png;base64,<payload>``.
    Parts that don't match are dropped when the message is formatted.
    """

    data_uri: str
    kind: Literal["image"] = "image"


ContentPart = TextPart | ImagePart


@dataclass(frozen=True)
class ChatMessage:
    """A single message in a chat conversation.

    Content can be a plain string (text-only) or a tuple of content parts
    for multimodal input (text + images).
    """

    role: Role
    content: str | tuple[ContentPart, ...] = ""


@dataclass(frozen=True)
class ToolDefinition:
    """A function the model may call, described by a JSON-Schema parameter block."""

    name: str
    description: str = ""
    parameters: dict[str, Any] | None = None


@dataclass(frozen=True)
class StructuredRequest:
    """A complete, immutable chat completion request.

    ``response_schema`` is an opaque schema object understood by the configured
    SchemaAdapter (a pydantic model class, a JSON-Schema dict, ...).
    ``retry_budget`` of None means "use the client default".
    """

    messages: tuple[ChatMessage, ...]
    temperature: float = 0.1
    top_p: float | None = None
    frequency_penalty: float | None = None
    max_tokens: int | None = None
    response_schema: Any = None
    tools: tuple[ToolDefinition, ...] = ()
    correlation_id: str | None = None
    retry_budget: int | None = None

    @property
    def has_schema(self) -> bool:
        return self.response_schema is not None


@dataclass
class ToolCallFunction:
    """The function invocation details within a tool call."""

    name: str
    arguments: str  # JSON-encoded arguments string


@dataclass
class ToolCall:
    """A tool call requested by the model in its response."""

    id: str
    function: ToolCallFunction
    type: str = "function"


@dataclass
class TokenUsage:
    """Token usage statistics from a completion."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass
class AssistantMessage:
    """The assistant turn carried by a completion choice."""

    content: str
    tool_calls: list[ToolCall] = field(default_factory=list)
    role: str = "assistant"


@dataclass
class ChatCompletionChoice:
    """A single candidate answer (always index 0 for this backend)."""

    message: AssistantMessage
    index: int = 0
    finish_reason: str = "stop"
