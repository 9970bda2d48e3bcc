"""Abstract interface (port) for structured chat completions, as seen by callers."""

from abc import ABC, abstractmethod

from structured_llm.domain.entities import ResponseEnvelope, StructuredRequest


class LLMClient(ABC):
    """Port for LLM interactions: implemented in the infrastructure layer."""

    type: str = ""
    has_vision: bool = False

    def __init__(self, model_name: str):
        self.model_name = model_name

    @abstractmethod
    async def create_chat_completion(
        self, request: StructuredRequest
    ) -> ResponseEnvelope:
        """Run a chat completion and return the normalized envelope.

        Returns a ``StructuredResult`` when ``request.response_schema`` is set,
        otherwise a ``ChatCompletionResult``.

        Raises:
            RetriesExhaustedError: When every attempt in the retry budget failed.
        """
        ...
