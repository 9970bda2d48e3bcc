"""Schema adapter for plain JSON-Schema documents, validated with jsonschema."""

from typing import Any

from jsonschema import Draft202012Validator

from structured_llm.application.interfaces import SchemaAdapter


class JsonSchemaAdapter(SchemaAdapter):
    """Schemas are JSON-Schema dicts; translation is the identity."""

    def to_json_schema(self, schema: Any) -> dict[str, Any]:
        if not isinstance(schema, dict):
            raise TypeError(
                f"JsonSchemaAdapter expects a dict schema, got {type(schema).__name__}"
            )
        return schema

    def validate(self, schema: Any, value: Any) -> bool:
        validator = Draft202012Validator(self.to_json_schema(schema))
        return validator.is_valid(value)
