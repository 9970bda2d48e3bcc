"""Colored LogLine sink: ANSI-colored console rendering of completion events.

Turns the structured LogLine records emitted by the completion pipeline into
stdlib log records with a color per category, making retries and cache hits
easy to spot in the terminal.

Color scheme:
    🟣 Magenta: Ollama calls / retries
    🔵 Blue: LLM cache
    🔴 Red: Level 0 (errors, terminal failures)
    ⚪ Gray: Auxiliary details
"""

import logging

from structured_llm.domain.entities import LogLine


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


# ── Category Definitions ─────────────────────────────────────────────

_CATEGORY_STYLES: dict[str, tuple[str, str]] = {
    "ollama": (_Colors.MAGENTA, "🤖"),
    "llm_cache": (_Colors.BLUE, "💾"),
}
_DEFAULT_STYLE = (_Colors.WHITE, "⚙️")

_LEVELS = {0: logging.ERROR, 1: logging.INFO, 2: logging.DEBUG}


# ── ColoredLogLineSink ───────────────────────────────────────────────

class ColoredLogLineSink:
    """Callable LogLine consumer backed by stdlib logging.

    Usage:
        sink = ColoredLogLineSink("structured_llm.ollama")
        client = OllamaLLMClient(..., log=sink)
    """

    def __init__(self, logger_name: str = "structured_llm", *, use_colors: bool = True):
        self._logger = logging.getLogger(logger_name)
        self._use_colors = use_colors

    def __call__(self, line: LogLine) -> None:
        self._logger.log(_LEVELS.get(line.level, logging.INFO), self.render(line))

    def render(self, line: LogLine) -> str:
        """Format one record as ``[category] message (key=value | ...)``."""
        if not self._use_colors:
            text = f"[{line.category}] {line.message}"
            if line.auxiliary:
                text += f" ({_details(line)})"
            return text

        color, icon = _CATEGORY_STYLES.get(line.category, _DEFAULT_STYLE)
        if line.level == 0:
            color, icon = _Colors.RED, "❌"
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{line.category}]{_Colors.RESET} "
            f"{color}{line.message}{_Colors.RESET}"
        )
        if line.auxiliary:
            formatted += f" {_Colors.GRAY}({_details(line)}){_Colors.RESET}"
        return formatted


def _details(line: LogLine) -> str:
    return " | ".join(f"{k}={v.value}" for k, v in line.auxiliary.items())
