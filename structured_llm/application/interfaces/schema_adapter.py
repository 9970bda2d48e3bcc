"""Abstract schema adapter: translates and validates caller-defined schema objects."""

from abc import ABC, abstractmethod
from typing import Any


class SchemaAdapter(ABC):
    """Port for schema handling.

    The client never interprets schema objects itself: it asks the adapter for a
    JSON-Schema rendition (sent to the backend as the ``format`` directive) and
    for a yes/no verdict on parsed output.
    """

    @abstractmethod
    def to_json_schema(self, schema: Any) -> dict[str, Any]:
        """Translate a schema object into a JSON-Schema document."""
        ...

    @abstractmethod
    def validate(self, schema: Any, value: Any) -> bool:
        """Return True when ``value`` conforms to ``schema``."""
        ...
