"""Centralized logging configuration.

Applies per-category log levels from Settings so that noisy loggers
(e.g. httpx/httpcore) can be silenced without affecting the completion
pipeline.

Usage:
    from structured_llm.infrastructure.logging.log_config import setup_logging
    setup_logging()   # Call once at startup
"""

import logging
import sys

from structured_llm.config import Settings, get_settings


# ── Logger-name → Settings-field mapping ────────────────────────────
#
# Each entry maps one or more Python logger names to a Settings field.
# When setup_logging() runs, it sets the level of each listed logger
# to the value of the corresponding setting.

_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_http": [
        "httpx",
        "httpcore",
    ],
    "log_level_ollama": [
        "structured_llm.infrastructure.ollama",
        "structured_llm.infrastructure.llm",
        "structured_llm.application.services",
        "structured_llm.ollama",
    ],
    "log_level_cache": [
        "structured_llm.infrastructure.cache",
        "structured_llm.llm_cache",
    ],
}


def setup_logging(settings: Settings | None = None) -> None:
    """Configure Python logging levels from settings.

    Call this once during startup.
    """
    settings = settings or get_settings()
    root_level = _parse_level(settings.log_level)

    # ── Root logger ────────────────────────────────────────────────
    root = logging.getLogger()
    root.setLevel(root_level)

    # Scripts and tests may not have a handler yet.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(levelname)-8s %(name)s: %(message)s",
            )
        )
        root.addHandler(handler)

    # ── Per-category loggers ───────────────────────────────────────
    for settings_field, logger_names in _CATEGORY_MAP.items():
        raw_level: str = getattr(settings, settings_field, "INFO")
        level = _parse_level(raw_level)

        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s, http=%s, ollama=%s, cache=%s",
        settings.log_level,
        settings.log_level_http,
        settings.log_level_ollama,
        settings.log_level_cache,
    )


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
