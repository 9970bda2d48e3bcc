"""JSON-file response cache: survives restarts.

Storage layout:
    <cache_dir>/llm_calls.json
        {
          "entries":  {<fingerprint>: {"data": <envelope dict>, "timestamp": <epoch s>, "request_id": "..."}},
          "requests": {<request_id>: [<fingerprint>, ...]}
        }
"""

import asyncio
import json
import logging
import time
from pathlib import Path
from typing import Any

from structured_llm.application.interfaces import ResponseCache
from structured_llm.domain.entities import (
    ResponseEnvelope,
    envelope_from_dict,
    envelope_to_dict,
)

logger = logging.getLogger(__name__)

_CACHE_FILENAME = "llm_calls.json"
_ONE_WEEK = 7 * 24 * 60 * 60


class FileResponseCache(ResponseCache):
    """Infrastructure adapter for an on-disk cache of final envelopes.

    Entries older than ``max_age_seconds`` are misses and get pruned on the next
    write. Reads and writes are serialized per instance; separate instances
    pointing at the same directory are last-writer-wins.
    """

    def __init__(self, cache_dir: str | Path, max_age_seconds: int = _ONE_WEEK):
        self._cache_dir = Path(cache_dir)
        self._cache_dir.mkdir(parents=True, exist_ok=True)
        self._cache_file = self._cache_dir / _CACHE_FILENAME
        self._max_age_seconds = max_age_seconds
        self._lock = asyncio.Lock()

    @property
    def cache_file(self) -> Path:
        return self._cache_file

    async def get(
        self, fingerprint: str, correlation_id: str
    ) -> ResponseEnvelope | None:
        async with self._lock:
            store = self._read()
            entry = store["entries"].get(fingerprint)
            if entry is None:
                return None
            if self._is_expired(entry):
                logger.debug("Cache entry %s expired", fingerprint[:12])
                return None

            used = store["requests"].setdefault(correlation_id, [])
            if fingerprint not in used:
                used.append(fingerprint)
                self._write(store)

        return envelope_from_dict(entry["data"])

    async def set(
        self, fingerprint: str, value: ResponseEnvelope, correlation_id: str
    ) -> None:
        async with self._lock:
            store = self._read()
            self._prune(store)
            store["entries"][fingerprint] = {
                "data": envelope_to_dict(value),
                "timestamp": time.time(),
                "request_id": correlation_id,
            }
            used = store["requests"].setdefault(correlation_id, [])
            if fingerprint not in used:
                used.append(fingerprint)
            self._write(store)

        logger.debug("Cached response %s for request %s", fingerprint[:12], correlation_id)

    async def delete_for_request(self, correlation_id: str) -> int:
        """Remove the entries used by one request; return how many were removed."""
        async with self._lock:
            store = self._read()
            fingerprints = store["requests"].pop(correlation_id, [])
            removed = 0
            for fingerprint in fingerprints:
                if store["entries"].pop(fingerprint, None) is not None:
                    removed += 1
            self._write(store)

        logger.info("Removed %d cache entries for request %s", removed, correlation_id)
        return removed

    # ── Internals ───────────────────────────────────────────────────

    def _is_expired(self, entry: dict[str, Any]) -> bool:
        return time.time() - entry.get("timestamp", 0) > self._max_age_seconds

    def _prune(self, store: dict[str, Any]) -> None:
        expired = {fp for fp, entry in store["entries"].items() if self._is_expired(entry)}
        if not expired:
            return
        for fp in expired:
            del store["entries"][fp]
        for request_id in list(store["requests"]):
            remaining = [fp for fp in store["requests"][request_id] if fp not in expired]
            if remaining:
                store["requests"][request_id] = remaining
            else:
                del store["requests"][request_id]
        logger.info("Pruned %d expired cache entries", len(expired))

    def _read(self) -> dict[str, Any]:
        if not self._cache_file.exists():
            return {"entries": {}, "requests": {}}
        try:
            store = json.loads(self._cache_file.read_text("utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Unreadable cache file %s, starting empty: %s", self._cache_file, exc)
            return {"entries": {}, "requests": {}}
        store.setdefault("entries", {})
        store.setdefault("requests", {})
        return store

    def _write(self, store: dict[str, Any]) -> None:
        tmp_path = self._cache_file.with_suffix(".tmp")
        tmp_path.write_text(json.dumps(store), "utf-8")
        tmp_path.replace(self._cache_file)
