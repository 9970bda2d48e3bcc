"""Request builder: assembles the Ollama /api/chat payload from a StructuredRequest."""

import json
from typing import Any

from structured_llm.application.interfaces import SchemaAdapter
from structured_llm.application.services.log_emitter import LogEmitter
from structured_llm.application.services.message_formatter import format_messages
from structured_llm.domain.entities import AuxiliaryValue, StructuredRequest, ToolDefinition


def build_options(request: StructuredRequest) -> dict[str, Any]:
    """Map sampling parameters onto Ollama's option names.

    Ollama has no additive frequency penalty; it uses a multiplicative
    ``repeat_penalty`` where 1.0 means "no penalty". Unset values are omitted.
    """
    options: dict[str, Any] = {"temperature": request.temperature}
    if request.top_p is not None:
        options["top_p"] = request.top_p
    if request.frequency_penalty is not None:
        options["repeat_penalty"] = 1 + request.frequency_penalty
    if request.max_tokens is not None:
        options["num_predict"] = request.max_tokens
    return options


def build_tool_declaration(tool: ToolDefinition) -> dict[str, Any]:
    """Translate a tool into Ollama's function-declaration shape."""
    return {
        "type": "function",
        "function": {
            "name": tool.name,
            "description": tool.description or "",
            "parameters": tool.parameters or {},
        },
    }


class RequestBuilder:
    """Builds backend payloads for one model.

    Usage:
        builder = RequestBuilder(model="llama3.2", schema_adapter=PydanticSchemaAdapter())
        payload = builder.build(request)
    """

    def __init__(
        self,
        model: str,
        schema_adapter: SchemaAdapter,
        *,
        keep_alive: str = "5m",
        emitter: LogEmitter | None = None,
    ):
        self._model = model
        self._schema_adapter = schema_adapter
        self._keep_alive = keep_alive
        self._emitter = emitter or LogEmitter()

    def build(self, request: StructuredRequest) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self._model,
            "messages": format_messages(request.messages),
            # Structured output and tool extraction both need the whole body.
            "stream": False,
            "options": build_options(request),
            "keep_alive": self._keep_alive,
        }

        if request.has_schema:
            json_schema = self._schema_adapter.to_json_schema(request.response_schema)
            payload["format"] = json_schema
            self._emitter.emit(
                "ollama",
                "Using structured output with schema",
                level=1,
                schemaKeys=AuxiliaryValue(
                    value=json.dumps(list((json_schema.get("properties") or {}).keys())),
                    type="object",
                ),
            )

        if request.tools:
            payload["tools"] = [build_tool_declaration(t) for t in request.tools]

        return payload
