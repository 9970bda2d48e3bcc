"""Dependency wiring: builds a ready-to-use client from Settings."""

import logging

import httpx

from structured_llm.application.interfaces import ResponseCache, SchemaAdapter
from structured_llm.config import Settings, get_settings
from structured_llm.domain.entities import LogCallback
from structured_llm.infrastructure.cache import FileResponseCache
from structured_llm.infrastructure.llm import OllamaLLMClient
from structured_llm.infrastructure.logging.colored_logger import ColoredLogLineSink
from structured_llm.infrastructure.logging.log_config import setup_logging
from structured_llm.infrastructure.ollama import OllamaClient

logger = logging.getLogger(__name__)


def create_llm_client(
    settings: Settings | None = None,
    *,
    model_name: str | None = None,
    schema_adapter: SchemaAdapter | None = None,
    cache: ResponseCache | None = None,
    log: LogCallback | None = None,
    configure_logging: bool = True,
) -> OllamaLLMClient:
    """Provides an OllamaLLMClient with transport, cache and logging wired up.

    When caching is enabled and no cache is passed, a FileResponseCache under
    ``settings.cache_dir`` is used. Without a ``log`` callback, events go to
    the colored console sink. Per-category log levels from Settings are
    applied unless ``configure_logging`` is False (applications that own
    their logging setup).
    """
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings)
    enable_caching = settings.enable_caching or cache is not None

    if cache is None and settings.enable_caching:
        cache = FileResponseCache(
            settings.cache_dir, max_age_seconds=settings.cache_max_age_seconds
        )

    ollama = OllamaClient(
        base_url=settings.ollama_base_url,
        timeout=settings.ollama_timeout,
        http_client=httpx.AsyncClient(timeout=settings.ollama_timeout),
    )

    model = model_name or settings.ollama_model
    logger.info(
        "Ollama client ready: model=%s base_url=%s caching=%s",
        model,
        settings.ollama_base_url,
        enable_caching,
    )

    return OllamaLLMClient(
        model,
        ollama_client=ollama,
        schema_adapter=schema_adapter,
        cache=cache,
        enable_caching=enable_caching,
        log=log or ColoredLogLineSink("structured_llm.ollama"),
        keep_alive=settings.ollama_keep_alive,
        default_retry_budget=settings.default_retry_budget,
        backoff_seconds=settings.retry_backoff_seconds,
    )
