"""Delivers LogLine records to the caller's logger without ever failing a completion."""

import logging

from structured_llm.domain.entities import AuxiliaryValue, LogCallback, LogLine

logger = logging.getLogger(__name__)

_STDLIB_LEVELS = {0: logging.ERROR, 1: logging.INFO, 2: logging.DEBUG}


class LogEmitter:
    """Wraps an optional LogLine callback.

    Without a callback, records are written to stdlib logging under
    ``structured_llm.<category>``. A callback that raises is reported once per
    record through this module's logger and the completion carries on.
    """

    def __init__(self, callback: LogCallback | None = None):
        self._callback = callback

    def emit(
        self,
        category: str,
        message: str,
        *,
        level: int = 1,
        **auxiliary: AuxiliaryValue,
    ) -> None:
        line = LogLine(
            category=category, message=message, level=level, auxiliary=auxiliary
        )
        if self._callback is None:
            _to_stdlib(line)
            return
        try:
            self._callback(line)
        except Exception:
            logger.exception("Logger callback raised while handling %r", message)


def _to_stdlib(line: LogLine) -> None:
    details = " | ".join(f"{k}={v.value}" for k, v in line.auxiliary.items())
    logging.getLogger(f"structured_llm.{line.category}").log(
        _STDLIB_LEVELS.get(line.level, logging.INFO),
        "%s%s",
        line.message,
        f" ({details})" if details else "",
    )
