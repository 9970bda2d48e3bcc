"""LLM infrastructure module: concrete LLM client implementations."""

from .ollama_llm_client import OllamaLLMClient

__all__ = [
    "OllamaLLMClient",
]
