import json
import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_SETTINGS_FILE = Path("data/settings.json")
_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)
_MODEL_KEYS = frozenset({
    "ollama_model",
})


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # Ollama server
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2"
    ollama_keep_alive: str = "5m"            # How long the server keeps the model loaded
    ollama_timeout: float = 120.0            # Seconds, per HTTP request

    # Completion defaults
    default_retry_budget: int = 3
    retry_backoff_seconds: float = 1.0       # Delay before retry n is base * 2**n

    # Response cache
    enable_caching: bool = False
    cache_dir: str = ".cache/llm"
    cache_max_age_seconds: int = 7 * 24 * 60 * 60

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_http: str = "WARNING"          # httpx / httpcore: outbound HTTP
    log_level_ollama: str = "INFO"           # Ollama client and completion pipeline
    log_level_cache: str = "INFO"            # Response cache stores

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Merge runtime overrides from data/settings.json into model settings."""
        if _SETTINGS_FILE.exists():
            try:
                overrides = json.loads(_SETTINGS_FILE.read_text("utf-8"))
                for key in _MODEL_KEYS:
                    if key in overrides and isinstance(overrides[key], str):
                        object.__setattr__(self, key, overrides[key])
            except (OSError, json.JSONDecodeError) as exc:
                _config_logger.warning("Could not load settings overrides: %s", exc)


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance: reads .env once."""
    return Settings()
