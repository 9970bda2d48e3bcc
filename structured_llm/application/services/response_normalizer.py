"""Response normalizer: maps native Ollama responses onto the uniform envelopes."""

import json
import time
import uuid
from typing import Any

from structured_llm.domain.entities import (
    AssistantMessage,
    ChatCompletionChoice,
    ChatCompletionResult,
    ResponseEnvelope,
    StructuredRequest,
    StructuredResult,
    TokenUsage,
    ToolCall,
    ToolCallFunction,
)


def extract_usage(raw: dict[str, Any]) -> TokenUsage:
    """Token counts as reported by the backend; missing counts are 0."""
    prompt_tokens = raw.get("prompt_eval_count") or 0
    completion_tokens = raw.get("eval_count") or 0
    return TokenUsage(
        prompt_tokens=prompt_tokens,
        completion_tokens=completion_tokens,
        total_tokens=prompt_tokens + completion_tokens,
    )


def check_response_shape(raw: Any) -> None:
    """Raise ValueError unless ``raw`` has the native /api/chat response shape."""
    if not isinstance(raw, dict):
        raise ValueError(f"Malformed response: expected an object, got {type(raw).__name__}")

    message = raw.get("message")
    if message is None:
        return
    if not isinstance(message, dict):
        raise ValueError(f"Malformed response: message is {type(message).__name__}")

    tool_calls = message.get("tool_calls")
    if tool_calls is None:
        return
    if not isinstance(tool_calls, list):
        raise ValueError(f"Malformed response: tool_calls is {type(tool_calls).__name__}")
    for index, raw_call in enumerate(tool_calls):
        if not isinstance(raw_call, dict):
            raise ValueError(f"Malformed response: tool call {index} is {type(raw_call).__name__}")
        function = raw_call.get("function")
        if function is not None and not isinstance(function, dict):
            raise ValueError(
                f"Malformed response: tool call {index} function is {type(function).__name__}"
            )


def build_tool_calls(raw_tool_calls: list[dict[str, Any]] | None) -> list[ToolCall]:
    """Give backend tool calls synthetic ids and string-encoded arguments.

    Ids are ``call_<epoch ms>_<index>``: unique within one response, not across
    processes.
    """
    if not raw_tool_calls:
        return []

    stamp = int(time.time() * 1000)
    tool_calls = []
    for index, raw_call in enumerate(raw_tool_calls):
        function = raw_call.get("function") or {}
        arguments = function.get("arguments", {})
        if not isinstance(arguments, str):
            arguments = json.dumps(arguments)
        tool_calls.append(
            ToolCall(
                id=f"call_{stamp}_{index}",
                function=ToolCallFunction(name=function.get("name", ""), arguments=arguments),
            )
        )
    return tool_calls


def normalize_response(
    raw: dict[str, Any],
    parsed: Any,
    request: StructuredRequest,
    *,
    model: str,
    provider: str = "ollama",
) -> ResponseEnvelope:
    """Build the envelope for one successful attempt.

    Args:
        raw: Native backend response.
        parsed: The message content after JSON parsing/validation (schema mode),
            or the raw content otherwise.
        request: The originating request; only ``has_schema`` picks the shape.
        model: Model identifier to echo.
        provider: Prefix for the synthetic envelope id.
    """
    usage = extract_usage(raw)

    if request.has_schema:
        return StructuredResult(data=parsed, usage=usage)

    if parsed is None:
        content = ""
    elif isinstance(parsed, str):
        content = parsed
    else:
        content = json.dumps(parsed)

    message = raw.get("message") or {}
    return ChatCompletionResult(
        id=f"{provider}-{uuid.uuid4().hex}",
        created=int(time.time()),
        model=model,
        choices=[
            ChatCompletionChoice(
                message=AssistantMessage(
                    content=content,
                    tool_calls=build_tool_calls(message.get("tool_calls")),
                ),
            )
        ],
        usage=usage,
    )
