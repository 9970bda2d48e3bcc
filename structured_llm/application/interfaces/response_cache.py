"""Abstract response cache: storage port behind the cache gate."""

from abc import ABC, abstractmethod

from structured_llm.domain.entities import ResponseEnvelope


class ResponseCache(ABC):
    """Port for caching final response envelopes.

    Entries are addressed by request fingerprint; the correlation id records
    which caller request produced or reused an entry.
    """

    @abstractmethod
    async def get(
        self, fingerprint: str, correlation_id: str
    ) -> ResponseEnvelope | None:
        """Return the cached envelope, or None on a miss."""
        ...

    @abstractmethod
    async def set(
        self, fingerprint: str, value: ResponseEnvelope, correlation_id: str
    ) -> None:
        """Store the final envelope for a fingerprint."""
        ...
