"""In-process response cache."""

import copy
import logging
from collections import defaultdict

from structured_llm.application.interfaces import ResponseCache
from structured_llm.domain.entities import ResponseEnvelope

logger = logging.getLogger(__name__)


class InMemoryResponseCache(ResponseCache):
    """Dict-backed cache; lives as long as the process.

    Entries are deep-copied on the way in and out, so callers never share
    envelope objects with the store.
    """

    def __init__(self):
        self._entries: dict[str, ResponseEnvelope] = {}
        self._request_fingerprints: dict[str, set[str]] = defaultdict(set)

    async def get(
        self, fingerprint: str, correlation_id: str
    ) -> ResponseEnvelope | None:
        value = self._entries.get(fingerprint)
        if value is not None:
            self._request_fingerprints[correlation_id].add(fingerprint)
        return copy.deepcopy(value)

    async def set(
        self, fingerprint: str, value: ResponseEnvelope, correlation_id: str
    ) -> None:
        self._entries[fingerprint] = copy.deepcopy(value)
        self._request_fingerprints[correlation_id].add(fingerprint)

    async def delete_for_request(self, correlation_id: str) -> int:
        """Drop every entry the given request produced or reused; return the count."""
        fingerprints = self._request_fingerprints.pop(correlation_id, set())
        removed = 0
        for fingerprint in fingerprints:
            if self._entries.pop(fingerprint, None) is not None:
                removed += 1
        logger.debug("Removed %d cache entries for request %s", removed, correlation_id)
        return removed

    def __len__(self) -> int:
        return len(self._entries)
