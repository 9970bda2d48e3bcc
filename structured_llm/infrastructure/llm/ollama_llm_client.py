"""Ollama LLM client: concrete implementation of the LLMClient port.

Wires the OllamaClient transport into the StructuredCompletionService
(formatting, request building, cache gate, retries, normalization).
"""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType

from structured_llm.application.interfaces import (
    LLMClient,
    ResponseCache,
    SchemaAdapter,
)
from structured_llm.application.services import StructuredCompletionService
from structured_llm.application.services.structured_completion_service import Sleep
from structured_llm.domain.entities import LogCallback, ResponseEnvelope, StructuredRequest
from structured_llm.infrastructure.ollama import OllamaClient
from structured_llm.infrastructure.schema import PydanticSchemaAdapter

logger = logging.getLogger(__name__)


class OllamaLLMClient(LLMClient):
    """Structured-output client for a local Ollama server.

    Vision models (llava, bakllava, ...) accept the inline images produced
    by the message formatter, hence ``has_vision``.
    """

    type = "ollama"
    has_vision = True

    def __init__(
        self,
        model_name: str,
        *,
        ollama_client: OllamaClient | None = None,
        schema_adapter: SchemaAdapter | None = None,
        cache: ResponseCache | None = None,
        enable_caching: bool = False,
        log: LogCallback | None = None,
        keep_alive: str = "5m",
        default_retry_budget: int = 3,
        backoff_seconds: float = 1.0,
        sleep: Sleep = asyncio.sleep,
    ):
        super().__init__(model_name)
        self._ollama = ollama_client or OllamaClient()
        self._service = StructuredCompletionService(
            model_server=self._ollama,
            schema_adapter=schema_adapter or PydanticSchemaAdapter(),
            model=model_name,
            cache=cache,
            enable_caching=enable_caching,
            log=log,
            keep_alive=keep_alive,
            default_retry_budget=default_retry_budget,
            backoff_seconds=backoff_seconds,
            sleep=sleep,
        )

    async def create_chat_completion(
        self, request: StructuredRequest
    ) -> ResponseEnvelope:
        return await self._service.create_chat_completion(request)

    async def aclose(self) -> None:
        await self._ollama.aclose()

    async def __aenter__(self) -> OllamaLLMClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
