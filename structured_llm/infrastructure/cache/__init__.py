"""Response cache stores."""

from .file_cache import FileResponseCache
from .memory_cache import InMemoryResponseCache

__all__ = ["FileResponseCache", "InMemoryResponseCache"]
