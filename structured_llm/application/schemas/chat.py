"""Pydantic v2 schemas (DTOs) for chat completion options coming from the automation layer."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from structured_llm.domain.entities import (
    ChatMessage,
    ContentPart,
    ImagePart,
    StructuredRequest,
    TextPart,
    ToolDefinition,
)


# ── Multimodal content parts ──


class ImageUrlDetail(BaseModel):
    """Image URL with optional detail level."""

    url: str
    detail: str | None = None  # "auto" | "low" | "high"


class ContentPartSchema(BaseModel):
    """A single part of a multimodal message content.

    Follows the OpenAI-compatible format:
    - type="text": contains a text field
    - type="image_url": contains an image_url field with a (data) URL
    """

    type: str  # "text" | "image_url"
    text: str | None = None
    image_url: ImageUrlDetail | None = None

    def to_domain(self) -> ContentPart | None:
        """Resolve to a tagged part; unknown or empty parts become None."""
        if self.type == "text" and self.text is not None:
            return TextPart(text=self.text)
        if self.type == "image_url" and self.image_url and self.image_url.url:
            return ImagePart(data_uri=self.image_url.url)
        return None


# ── Message schema ──


class ChatMessageSchema(BaseModel):
    """A chat message with multimodal support.

    Content can be either:
    - A plain string for text-only messages
    - A list of ContentPartSchema for multimodal messages (text + images)
    """

    role: str = Field(..., pattern=r"^(system|user|assistant)$")
    content: str | list[ContentPartSchema]

    def to_domain(self) -> ChatMessage:
        if isinstance(self.content, str):
            return ChatMessage(role=self.role, content=self.content)
        parts = tuple(
            part for part in (p.to_domain() for p in self.content) if part is not None
        )
        return ChatMessage(role=self.role, content=parts)


# ── Structured output / tools ──


class ResponseModelSchema(BaseModel):
    """Named response schema; ``schema`` is whatever the SchemaAdapter understands."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = ""
    schema_: Any = Field(..., alias="schema")


class ToolSchema(BaseModel):
    """A callable tool offered to the model."""

    name: str
    description: str | None = None
    parameters: dict[str, Any] | None = None


# ── Request ──


class ChatCompletionOptionsSchema(BaseModel):
    """Options for one create-chat-completion call."""

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessageSchema] = Field(
        ..., min_length=1, description="Conversation messages"
    )
    temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    top_p: float | None = Field(default=None, ge=0.0, le=1.0)
    frequency_penalty: float | None = None
    max_tokens: int | None = Field(default=None, gt=0, alias="maxTokens")
    response_model: ResponseModelSchema | None = None
    tools: list[ToolSchema] | None = None
    request_id: str | None = Field(default=None, alias="requestId")
    retries: int | None = None

    def to_domain(self) -> StructuredRequest:
        """Convert to the immutable domain request."""
        return StructuredRequest(
            messages=tuple(m.to_domain() for m in self.messages),
            temperature=self.temperature,
            top_p=self.top_p,
            frequency_penalty=self.frequency_penalty,
            max_tokens=self.max_tokens,
            response_schema=self.response_model.schema_ if self.response_model else None,
            tools=tuple(
                ToolDefinition(
                    name=t.name,
                    description=t.description or "",
                    parameters=t.parameters,
                )
                for t in (self.tools or [])
            ),
            correlation_id=self.request_id or None,
            retry_budget=self.retries,
        )
