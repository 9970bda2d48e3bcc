from .llm_client import LLMClient
from .model_server import ModelServerClient
from .response_cache import ResponseCache
from .schema_adapter import SchemaAdapter

__all__ = [
    "LLMClient",
    "ModelServerClient",
    "ResponseCache",
    "SchemaAdapter",
]
