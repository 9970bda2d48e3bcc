"""Schema adapters: pydantic models and raw JSON Schema."""

from .json_schema_adapter import JsonSchemaAdapter
from .pydantic_schema_adapter import PydanticSchemaAdapter

__all__ = ["JsonSchemaAdapter", "PydanticSchemaAdapter"]
