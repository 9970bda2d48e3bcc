"""Unit tests for request fingerprinting and the cache gate."""

import pytest

from structured_llm.application.services.cache_gate import CacheGate, compute_fingerprint
from structured_llm.application.services.log_emitter import LogEmitter
from structured_llm.domain.entities import (
    ChatMessage,
    StructuredRequest,
    StructuredResult,
    TokenUsage,
    ToolDefinition,
)
from structured_llm.infrastructure.cache import InMemoryResponseCache
from tests.unit.fakes import FailingCache, LogCollector


def _request(**overrides) -> StructuredRequest:
    defaults = {
        "messages": (ChatMessage(role="user", content="2+2?"),),
        "correlation_id": "req-1",
    }
    defaults.update(overrides)
    return StructuredRequest(**defaults)


# ── Fingerprint ──


def test_fingerprint_is_deterministic():
    a = compute_fingerprint(_request(), model="llama3.2", json_schema=None)
    b = compute_fingerprint(_request(), model="llama3.2", json_schema=None)

    assert a == b
    assert len(a) == 64


def test_fingerprint_ignores_mapping_key_order():
    tool_a = ToolDefinition(name="t", parameters={"type": "object", "properties": {}})
    tool_b = ToolDefinition(name="t", parameters={"properties": {}, "type": "object"})
    schema_a = {"type": "object", "properties": {"x": {"type": "number"}}}
    schema_b = {"properties": {"x": {"type": "number"}}, "type": "object"}

    a = compute_fingerprint(_request(tools=(tool_a,)), model="m", json_schema=schema_a)
    b = compute_fingerprint(_request(tools=(tool_b,)), model="m", json_schema=schema_b)

    assert a == b


def test_fingerprint_ignores_correlation_id_and_retry_budget():
    a = compute_fingerprint(_request(correlation_id="a", retry_budget=1), model="m", json_schema=None)
    b = compute_fingerprint(_request(correlation_id="b", retry_budget=5), model="m", json_schema=None)

    assert a == b


@pytest.mark.parametrize(
    "overrides",
    [
        {"temperature": 0.9},
        {"messages": (ChatMessage(role="user", content="3+3?"),)},
        {"tools": (ToolDefinition(name="click"),)},
    ],
)
def test_fingerprint_changes_with_relevant_fields(overrides):
    base = compute_fingerprint(_request(), model="m", json_schema=None)

    assert compute_fingerprint(_request(**overrides), model="m", json_schema=None) != base


def test_fingerprint_changes_with_model_and_schema():
    base = compute_fingerprint(_request(), model="m", json_schema=None)

    assert compute_fingerprint(_request(), model="other", json_schema=None) != base
    assert compute_fingerprint(_request(), model="m", json_schema={"type": "object"}) != base


# ── Gate ──


def _envelope() -> StructuredResult:
    return StructuredResult(data={"answer": 4}, usage=TokenUsage(1, 2, 3))


@pytest.mark.asyncio
async def test_gate_round_trip():
    gate = CacheGate(InMemoryResponseCache(), emitter=LogEmitter(LogCollector()))
    request = _request()

    assert await gate.lookup("fp", request) is None
    await gate.store("fp", _envelope(), request)

    assert await gate.lookup("fp", request) == _envelope()


@pytest.mark.asyncio
async def test_gate_logs_cache_hit():
    collector = LogCollector()
    gate = CacheGate(InMemoryResponseCache(), model="llama3.2", emitter=LogEmitter(collector))
    request = _request()
    await gate.store("fp", _envelope(), request)

    await gate.lookup("fp", request)

    hit = collector.lines[-1]
    assert hit.category == "llm_cache"
    assert hit.aux("requestId") == "req-1"
    assert hit.aux("modelName") == "llama3.2"


@pytest.mark.asyncio
@pytest.mark.parametrize("correlation_id", [None, ""])
async def test_gate_disengaged_without_correlation_id(correlation_id):
    cache = InMemoryResponseCache()
    gate = CacheGate(cache)
    request = _request(correlation_id=correlation_id)

    await gate.store("fp", _envelope(), request)

    assert len(cache) == 0
    assert await gate.lookup("fp", request) is None


@pytest.mark.asyncio
async def test_gate_disengaged_when_disabled_or_missing():
    cache = InMemoryResponseCache()
    await CacheGate(cache, enabled=False).store("fp", _envelope(), _request())
    assert len(cache) == 0

    assert CacheGate(None).is_engaged(_request()) is False


@pytest.mark.asyncio
async def test_failing_cache_is_treated_as_miss():
    collector = LogCollector()
    gate = CacheGate(FailingCache(), emitter=LogEmitter(collector))

    assert await gate.lookup("fp", _request()) is None
    await gate.store("fp", _envelope(), _request())

    assert collector.messages("llm_cache") == [
        "LLM cache lookup failed - treating as miss",
        "LLM cache write failed",
    ]
