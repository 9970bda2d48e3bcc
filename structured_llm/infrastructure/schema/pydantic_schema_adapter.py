"""Schema adapter for pydantic models: the default schema flavour."""

import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from structured_llm.application.interfaces import SchemaAdapter

logger = logging.getLogger(__name__)


class PydanticSchemaAdapter(SchemaAdapter):
    """Schemas are ``BaseModel`` subclasses.

    Usage:
        class Answer(BaseModel):
            answer: float

        adapter = PydanticSchemaAdapter()
        adapter.to_json_schema(Answer)       # {"properties": {"answer": ...}, ...}
        adapter.validate(Answer, {"answer": 4})  # True
    """

    def to_json_schema(self, schema: Any) -> dict[str, Any]:
        return _as_model(schema).model_json_schema()

    def validate(self, schema: Any, value: Any) -> bool:
        try:
            _as_model(schema).model_validate(value)
        except ValidationError as exc:
            logger.debug("Schema validation failed: %s", exc)
            return False
        return True


def _as_model(schema: Any) -> type[BaseModel]:
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        return schema
    raise TypeError(
        f"PydanticSchemaAdapter expects a BaseModel subclass, got {type(schema).__name__}"
    )
