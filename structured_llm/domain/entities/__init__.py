from .chat_message import (
    AssistantMessage,
    ChatCompletionChoice,
    ChatMessage,
    ContentPart,
    ImagePart,
    Role,
    StructuredRequest,
    TextPart,
    TokenUsage,
    ToolCall,
    ToolCallFunction,
    ToolDefinition,
)
from .completion_result import (
    ChatCompletionResult,
    ResponseEnvelope,
    StructuredResult,
    envelope_from_dict,
    envelope_to_dict,
)
from .log_line import AuxiliaryValue, LogCallback, LogLine

__all__ = [
    "AssistantMessage",
    "ChatCompletionChoice",
    "ChatMessage",
    "ContentPart",
    "ImagePart",
    "Role",
    "StructuredRequest",
    "TextPart",
    "TokenUsage",
    "ToolCall",
    "ToolCallFunction",
    "ToolDefinition",
    "ChatCompletionResult",
    "ResponseEnvelope",
    "StructuredResult",
    "envelope_from_dict",
    "envelope_to_dict",
    "AuxiliaryValue",
    "LogCallback",
    "LogLine",
]
