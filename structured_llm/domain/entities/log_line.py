"""Structured log record handed to the caller's logger callback."""

from dataclasses import dataclass, field
from typing import Any, Callable, Literal

AuxiliaryType = Literal["string", "integer", "float", "boolean", "object"]

# 0 = errors / always shown, 1 = info, 2 = debug
LogLevel = Literal[0, 1, 2]


@dataclass(frozen=True)
class AuxiliaryValue:
    """A typed value attached to a log record."""

    value: str
    type: AuxiliaryType = "string"


@dataclass(frozen=True)
class LogLine:
    """One structured event (retry, cache hit, terminal failure, ...)."""

    category: str
    message: str
    level: LogLevel = 1
    auxiliary: dict[str, AuxiliaryValue] = field(default_factory=dict)

    def aux(self, key: str) -> Any:
        """Return the raw value of an auxiliary entry, or None."""
        entry = self.auxiliary.get(key)
        return entry.value if entry else None


LogCallback = Callable[[LogLine], None]
