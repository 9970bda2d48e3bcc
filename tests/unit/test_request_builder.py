"""Unit tests for the request builder."""

import json

from structured_llm.application.services.log_emitter import LogEmitter
from structured_llm.application.services.request_builder import (
    RequestBuilder,
    build_options,
    build_tool_declaration,
)
from structured_llm.domain.entities import (
    ChatMessage,
    ImagePart,
    StructuredRequest,
    TextPart,
    ToolDefinition,
)
from structured_llm.infrastructure.schema import JsonSchemaAdapter, PydanticSchemaAdapter
from tests.unit.fakes import Answer, LogCollector


def _request(**overrides) -> StructuredRequest:
    defaults = {"messages": (ChatMessage(role="user", content="2+2?"),)}
    defaults.update(overrides)
    return StructuredRequest(**defaults)


# ── Options ──


def test_zero_frequency_penalty_maps_to_repeat_penalty_one():
    assert build_options(_request(frequency_penalty=0.0))["repeat_penalty"] == 1


def test_frequency_penalty_is_shifted_by_one():
    assert build_options(_request(frequency_penalty=0.5))["repeat_penalty"] == 1.5


def test_unset_frequency_penalty_is_omitted():
    assert "repeat_penalty" not in build_options(_request())


def test_sampling_options_pass_through():
    options = build_options(_request(temperature=0.7, top_p=0.9, max_tokens=256))

    assert options == {"temperature": 0.7, "top_p": 0.9, "num_predict": 256}


def test_default_temperature():
    assert build_options(_request()) == {"temperature": 0.1}


# ── Tools ──


def test_tool_declaration_defaults():
    declaration = build_tool_declaration(ToolDefinition(name="click"))

    assert declaration == {
        "type": "function",
        "function": {"name": "click", "description": "", "parameters": {}},
    }


def test_tool_declaration_keeps_parameters():
    params = {"type": "object", "properties": {"selector": {"type": "string"}}}
    declaration = build_tool_declaration(
        ToolDefinition(name="click", description="Click an element", parameters=params)
    )

    assert declaration["function"]["description"] == "Click an element"
    assert declaration["function"]["parameters"] == params


# ── Payload ──


def test_payload_basics():
    builder = RequestBuilder("llama3.2", PydanticSchemaAdapter(), keep_alive="10m")

    payload = builder.build(_request())

    assert payload["model"] == "llama3.2"
    assert payload["stream"] is False
    assert payload["keep_alive"] == "10m"
    assert payload["messages"] == [{"role": "user", "content": "2+2?"}]
    assert "format" not in payload
    assert "tools" not in payload


def test_payload_formats_multimodal_messages():
    builder = RequestBuilder("llava", PydanticSchemaAdapter())
    message = ChatMessage(
        role="user",
        content=(TextPart("What is this?"), ImagePart("data:image/png;base64,AAAA")),
    )

    payload = builder.build(_request(messages=(message,)))

    assert payload["messages"] == [
        {"role": "user", "content": "What is this?", "images": ["AAAA"]}
    ]


def test_schema_attached_as_format_and_keys_logged():
    collector = LogCollector()
    builder = RequestBuilder(
        "llama3.2", PydanticSchemaAdapter(), emitter=LogEmitter(collector)
    )

    payload = builder.build(_request(response_schema=Answer))

    assert payload["format"]["type"] == "object"
    assert "answer" in payload["format"]["properties"]
    assert collector.messages("ollama") == ["Using structured output with schema"]
    assert json.loads(collector.lines[0].aux("schemaKeys")) == ["answer"]


def test_json_schema_adapter_schema_passes_through():
    schema = {"type": "object", "properties": {"title": {"type": "string"}}}
    builder = RequestBuilder("llama3.2", JsonSchemaAdapter(), emitter=LogEmitter(LogCollector()))

    payload = builder.build(_request(response_schema=schema))

    assert payload["format"] == schema


def test_empty_tools_are_not_sent():
    builder = RequestBuilder("llama3.2", PydanticSchemaAdapter())

    assert "tools" not in builder.build(_request(tools=()))


def test_tools_are_declared_in_order():
    builder = RequestBuilder("llama3.2", PydanticSchemaAdapter())
    tools = (ToolDefinition(name="goto"), ToolDefinition(name="click"))

    payload = builder.build(_request(tools=tools))

    assert [t["function"]["name"] for t in payload["tools"]] == ["goto", "click"]
