"""Unit tests for the pydantic and JSON-Schema adapters."""

import pytest
from pydantic import BaseModel

from structured_llm.infrastructure.schema import JsonSchemaAdapter, PydanticSchemaAdapter
from tests.unit.fakes import Answer


class Link(BaseModel):
    href: str
    text: str = ""


class PageLinks(BaseModel):
    links: list[Link]


def test_pydantic_json_schema_lists_properties():
    schema = PydanticSchemaAdapter().to_json_schema(PageLinks)

    assert schema["type"] == "object"
    assert list(schema["properties"]) == ["links"]
    assert "Link" in schema["$defs"]


def test_pydantic_validate():
    adapter = PydanticSchemaAdapter()

    assert adapter.validate(Answer, {"answer": 4}) is True
    assert adapter.validate(Answer, {"answer": "four"}) is False
    assert adapter.validate(Answer, {}) is False
    assert adapter.validate(PageLinks, {"links": [{"href": "/a"}]}) is True
    assert adapter.validate(PageLinks, "not an object") is False


def test_pydantic_adapter_rejects_non_models():
    with pytest.raises(TypeError):
        PydanticSchemaAdapter().to_json_schema({"type": "object"})


def test_json_schema_adapter():
    schema = {
        "type": "object",
        "properties": {"answer": {"type": "number"}},
        "required": ["answer"],
    }
    adapter = JsonSchemaAdapter()

    assert adapter.to_json_schema(schema) is schema
    assert adapter.validate(schema, {"answer": 4}) is True
    assert adapter.validate(schema, {"answer": "4"}) is False
    assert adapter.validate(schema, {}) is False


def test_json_schema_adapter_rejects_non_dicts():
    with pytest.raises(TypeError):
        JsonSchemaAdapter().to_json_schema(Answer)
