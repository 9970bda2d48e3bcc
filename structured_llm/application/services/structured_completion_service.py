"""Structured completion use case: cache gate, retrying invoker, and normalization.

Pipeline per call:
    1. Build the backend payload (messages, options, format, tools)
    2. Serve from cache when the caller opted in with a correlation id
    3. Call the model server, parse and validate the output, retry on failure
    4. Normalize into a ResponseEnvelope and write it through the cache
"""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from structured_llm.application.interfaces import (
    ModelServerClient,
    ResponseCache,
    SchemaAdapter,
)
from structured_llm.application.services.cache_gate import CacheGate, compute_fingerprint
from structured_llm.application.services.log_emitter import LogEmitter
from structured_llm.application.services.request_builder import RequestBuilder
from structured_llm.application.services.response_normalizer import (
    check_response_shape,
    normalize_response,
)
from structured_llm.domain.entities import (
    AuxiliaryValue,
    LogCallback,
    ResponseEnvelope,
    StructuredRequest,
)
from structured_llm.domain.exceptions import (
    CreateChatCompletionResponseError,
    OutputParseError,
    RetriesExhaustedError,
    SchemaValidationError,
)

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class AttemptState(str, Enum):
    """States of the per-call retry machine."""

    ATTEMPTING = "attempting"
    SUCCESS = "success"
    EXHAUSTED = "exhausted"


class StructuredCompletionService:
    """Application service: one retrying, cache-fronted chat completion per call.

    The service holds no per-call state, so concurrent calls on one instance are
    independent. Only the injected cache is shared between them.
    """

    def __init__(
        self,
        model_server: ModelServerClient,
        schema_adapter: SchemaAdapter,
        model: str,
        *,
        cache: ResponseCache | None = None,
        enable_caching: bool = False,
        log: LogCallback | None = None,
        keep_alive: str = "5m",
        default_retry_budget: int = 3,
        backoff_seconds: float = 1.0,
        sleep: Sleep = asyncio.sleep,
    ):
        self._model_server = model_server
        self._schema_adapter = schema_adapter
        self._model = model
        self._emitter = LogEmitter(log)
        self._builder = RequestBuilder(
            model, schema_adapter, keep_alive=keep_alive, emitter=self._emitter
        )
        self._cache_gate = CacheGate(
            cache, enabled=enable_caching, model=model, emitter=self._emitter
        )
        self._default_retry_budget = default_retry_budget
        self._backoff_seconds = backoff_seconds
        self._sleep = sleep

    @property
    def model(self) -> str:
        return self._model

    async def create_chat_completion(
        self, request: StructuredRequest
    ) -> ResponseEnvelope:
        """Execute a chat completion with validation, retries and caching.

        Returns:
            ``StructuredResult`` when the request has a response schema,
            ``ChatCompletionResult`` otherwise.

        Raises:
            RetriesExhaustedError: After the retry budget is spent. ``last_error``
                holds the final backend, parse or validation failure.
        """
        payload = self._builder.build(request)
        fingerprint = compute_fingerprint(
            request, model=self._model, json_schema=payload.get("format")
        )

        cached = await self._cache_gate.lookup(fingerprint, request)
        if cached is not None:
            return cached

        raw, parsed = await self._invoke_with_retries(payload, request)

        envelope = normalize_response(
            raw,
            parsed,
            request,
            model=self._model,
            provider=self._model_server.provider_name,
        )
        await self._cache_gate.store(fingerprint, envelope, request)
        return envelope

    def _retry_budget(self, request: StructuredRequest) -> int:
        if request.retry_budget is None:
            return self._default_retry_budget
        return request.retry_budget

    async def _invoke_with_retries(
        self, payload: dict[str, Any], request: StructuredRequest
    ) -> tuple[dict[str, Any], Any]:
        """Run the attempt loop; return the raw response and its parsed content."""
        budget = self._retry_budget(request)
        provider = self._model_server.provider_name
        state = AttemptState.ATTEMPTING
        attempt = 0
        last_error: Exception | None = None
        raw: dict[str, Any] = {}
        parsed: Any = None

        while state is AttemptState.ATTEMPTING:
            if attempt >= budget:
                state = AttemptState.EXHAUSTED
                break

            has_next = attempt < budget - 1

            try:
                raw = await self._model_server.chat(payload)
                check_response_shape(raw)
            except Exception as exc:
                error = CreateChatCompletionResponseError(f"{provider} error: {exc}")
                error.__cause__ = exc
                last_error = error
                if has_next:
                    delay = self._backoff_seconds * (2 ** attempt)
                    self._emitter.emit(
                        provider,
                        f"Request failed, retrying (attempt {attempt + 1}/{budget})",
                        level=1,
                        error=AuxiliaryValue(value=str(error)),
                        delaySeconds=AuxiliaryValue(value=str(delay), type="float"),
                    )
                    await self._sleep(delay)
                attempt += 1
                continue

            try:
                parsed = self._parse_content(raw, request)
            except (OutputParseError, SchemaValidationError) as exc:
                last_error = exc
                if has_next:
                    self._emitter.emit(
                        provider,
                        f"Failed to parse JSON response, retrying (attempt {attempt + 1}/{budget})",
                        level=1,
                        error=AuxiliaryValue(value=str(exc)),
                        rawContent=AuxiliaryValue(value=_preview(raw)),
                    )
                attempt += 1
                continue

            state = AttemptState.SUCCESS

        if state is AttemptState.SUCCESS:
            return raw, parsed

        self._emitter.emit(
            provider,
            "All retry attempts failed",
            level=0,
            error=AuxiliaryValue(value=str(last_error)),
            modelName=AuxiliaryValue(value=self._model),
        )
        logger.error(
            "Chat completion failed after %d attempt(s) on %s: %s",
            attempt,
            self._model,
            last_error,
        )
        raise RetriesExhaustedError(attempts=attempt, last_error=last_error) from last_error

    def _parse_content(self, raw: dict[str, Any], request: StructuredRequest) -> Any:
        """Return the message content, parsed and validated when a schema is set."""
        content = (raw.get("message") or {}).get("content")
        if not request.has_schema:
            return content

        if isinstance(content, str):
            try:
                content = json.loads(content)
            except json.JSONDecodeError as exc:
                raise OutputParseError(
                    f"Response is not valid JSON: {exc}", raw_content=content
                ) from exc

        if not self._schema_adapter.validate(request.response_schema, content):
            raise SchemaValidationError()
        return content


def _preview(raw: dict[str, Any], limit: int = 100) -> str:
    content = (raw.get("message") or {}).get("content")
    return str(content or "")[:limit]
