from .chat import (
    ChatCompletionOptionsSchema,
    ChatMessageSchema,
    ContentPartSchema,
    ImageUrlDetail,
    ResponseModelSchema,
    ToolSchema,
)

__all__ = [
    "ChatCompletionOptionsSchema",
    "ChatMessageSchema",
    "ContentPartSchema",
    "ImageUrlDetail",
    "ResponseModelSchema",
    "ToolSchema",
]
