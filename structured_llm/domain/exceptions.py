"""Domain-specific exceptions: framework-independent."""


class StructuredLLMError(Exception):
    """Base class for every error raised by the structured completion client."""


class ChatProviderError(StructuredLLMError):
    """Raised when the model server call itself fails (transport or backend fault).

    ``status_code`` is 0 when no HTTP response was received.
    """

    def __init__(self, provider: str, status_code: int, message: str):
        self.provider = provider
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{provider}] {status_code}: {message}")


class CreateChatCompletionResponseError(StructuredLLMError):
    """A backend failure observed by the retry loop, wrapped with the original message."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class OutputParseError(StructuredLLMError):
    """Raised when the model's content is not valid JSON but a schema was requested."""

    def __init__(self, message: str, raw_content: str = ""):
        self.message = message
        self.raw_content = raw_content
        super().__init__(message)


class SchemaValidationError(StructuredLLMError):
    """Raised when parsed output does not conform to the requested schema."""

    def __init__(self, message: str = "Schema validation failed"):
        self.message = message
        super().__init__(message)


class RetriesExhaustedError(StructuredLLMError):
    """Terminal failure after the retry budget is spent.

    ``last_error`` is the final recorded failure (None when no attempt was made).
    """

    def __init__(self, attempts: int, last_error: Exception | None):
        self.attempts = attempts
        self.last_error = last_error
        if last_error is None:
            detail = "no attempts were made"
        else:
            detail = f"{type(last_error).__name__}: {last_error}"
        super().__init__(f"All {attempts} attempt(s) failed: {detail}")
