"""Abstract model server interface: port for local LLM server adapters.

The application layer only needs a single non-streaming ``chat`` call; the
adapter owns transport details (HTTP, timeouts, connection pooling).
"""

from abc import ABC, abstractmethod
from typing import Any


class ModelServerClient(ABC):
    """Port: defines what the completion pipeline needs from a model server."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this backend (e.g. 'ollama')."""
        ...

    @abstractmethod
    async def chat(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Send one non-streaming chat request.

        Args:
            payload: The wire request built by the request builder
                (model, messages, stream=False, options, format, tools, keep_alive).

        Returns:
            The native response:
            ``{"message": {"role", "content", "tool_calls"?}, "prompt_eval_count"?, "eval_count"?}``.

        Raises:
            ChatProviderError: If the call fails for any transport or backend reason.
        """
        ...
