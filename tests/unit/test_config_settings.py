"""Unit tests for client settings and logging configuration."""

import logging
from pathlib import Path

from structured_llm.config import Settings
from structured_llm.infrastructure.logging.log_config import setup_logging


def test_settings_uses_project_env_file_independent_of_cwd():
    """Settings should always include the project .env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_project_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_project_env in normalized
    assert str(Path(".env")) in normalized


def test_settings_defaults():
    settings = Settings(_env_file=None)

    assert settings.ollama_base_url == "http://localhost:11434"
    assert settings.ollama_keep_alive == "5m"
    assert settings.default_retry_budget == 3
    assert settings.retry_backoff_seconds == 1.0
    assert settings.enable_caching is False


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("OLLAMA_BASE_URL", "http://gpu-box:11434")
    monkeypatch.setenv("ENABLE_CACHING", "true")
    monkeypatch.setenv("DEFAULT_RETRY_BUDGET", "5")

    settings = Settings(_env_file=None)

    assert settings.ollama_base_url == "http://gpu-box:11434"
    assert settings.enable_caching is True
    assert settings.default_retry_budget == 5


def test_setup_logging_applies_category_levels():
    settings = Settings(
        _env_file=None,
        log_level_http="ERROR",
        log_level_cache="DEBUG",
        log_level_ollama="not-a-level",
    )

    setup_logging(settings)

    assert logging.getLogger("httpx").level == logging.ERROR
    assert logging.getLogger("structured_llm.infrastructure.cache").level == logging.DEBUG
    assert logging.getLogger("structured_llm.infrastructure.ollama").level == logging.INFO
