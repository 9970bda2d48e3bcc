from .cache_gate import CacheGate, compute_fingerprint
from .log_emitter import LogEmitter
from .message_formatter import format_message, format_messages
from .request_builder import RequestBuilder
from .response_normalizer import check_response_shape, normalize_response
from .structured_completion_service import AttemptState, StructuredCompletionService

__all__ = [
    "CacheGate",
    "compute_fingerprint",
    "LogEmitter",
    "format_message",
    "format_messages",
    "RequestBuilder",
    "check_response_shape",
    "normalize_response",
    "AttemptState",
    "StructuredCompletionService",
]
