"""Cache gate: fingerprints requests and fronts the response cache.

Caching only engages when a cache is configured, caching is enabled, and the
caller supplied a correlation id. Cache failures never fail a completion: a
failing lookup counts as a miss and a failing write is logged and ignored.
"""

import hashlib
import json
import logging
from dataclasses import asdict
from typing import Any

from structured_llm.application.interfaces import ResponseCache
from structured_llm.application.services.log_emitter import LogEmitter
from structured_llm.domain.entities import (
    AuxiliaryValue,
    ResponseEnvelope,
    StructuredRequest,
)

logger = logging.getLogger(__name__)


def compute_fingerprint(
    request: StructuredRequest,
    *,
    model: str,
    json_schema: dict[str, Any] | None,
) -> str:
    """Deterministic SHA-256 digest over the fields that shape the model output.

    The schema is fingerprinted through its JSON-Schema rendition so that schema
    objects without a stable ``repr`` (e.g. pydantic classes) still hash stably.
    Keys are sorted, so mapping order never changes the key.
    """
    key_data = {
        "messages": [asdict(m) for m in request.messages],
        "temperature": request.temperature,
        "response_schema": json_schema,
        "tools": [asdict(t) for t in request.tools],
        "model": model,
    }
    encoded = json.dumps(key_data, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


class CacheGate:
    """Get-then-maybe-set in front of a ResponseCache (no compare-and-swap)."""

    def __init__(
        self,
        cache: ResponseCache | None,
        *,
        enabled: bool = True,
        model: str = "",
        emitter: LogEmitter | None = None,
    ):
        self._cache = cache
        self._enabled = enabled
        self._model = model
        self._emitter = emitter or LogEmitter()

    def is_engaged(self, request: StructuredRequest) -> bool:
        return self._cache is not None and self._enabled and bool(request.correlation_id)

    async def lookup(
        self, fingerprint: str, request: StructuredRequest
    ) -> ResponseEnvelope | None:
        """Return the cached envelope for this request, or None."""
        if not self.is_engaged(request):
            return None
        try:
            cached = await self._cache.get(fingerprint, request.correlation_id)
        except Exception as exc:
            logger.warning("Cache lookup failed, treating as miss: %s", exc)
            self._emitter.emit(
                "llm_cache",
                "LLM cache lookup failed - treating as miss",
                level=1,
                error=AuxiliaryValue(value=str(exc)),
            )
            return None

        if cached is not None:
            self._emitter.emit(
                "llm_cache",
                "LLM cache hit - returning cached response",
                level=1,
                requestId=AuxiliaryValue(value=request.correlation_id),
                modelName=AuxiliaryValue(value=self._model),
            )
        return cached

    async def store(
        self, fingerprint: str, value: ResponseEnvelope, request: StructuredRequest
    ) -> None:
        """Write the final envelope through to the cache."""
        if not self.is_engaged(request):
            return
        try:
            await self._cache.set(fingerprint, value, request.correlation_id)
        except Exception as exc:
            logger.warning("Cache write failed for request %s: %s", request.correlation_id, exc)
            self._emitter.emit(
                "llm_cache",
                "LLM cache write failed",
                level=1,
                requestId=AuxiliaryValue(value=request.correlation_id),
                error=AuxiliaryValue(value=str(exc)),
            )
