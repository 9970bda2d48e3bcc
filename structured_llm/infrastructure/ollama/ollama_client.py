"""Ollama API client: implements the ModelServerClient interface.

Communicates with a local Ollama server (default http://localhost:11434)
using httpx for non-streaming ``/api/chat`` requests.
"""

import json
import logging
from typing import Any

import httpx

from structured_llm.application.interfaces import ModelServerClient
from structured_llm.domain.exceptions import ChatProviderError

logger = logging.getLogger(__name__)


class OllamaClient(ModelServerClient):
    """Infrastructure adapter: connects to an Ollama server.

    An injected ``http_client`` is reused across calls and left open; without
    one, a client is created per call and closed afterwards.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        *,
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    @property
    def provider_name(self) -> str:
        return "ollama"

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def chat(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST the payload to ``/api/chat`` and return the decoded body."""
        url = f"{self._base_url}/api/chat"

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            try:
                response = await client.post(url, json=payload)
            except httpx.HTTPError as exc:
                raise ChatProviderError(
                    provider=self.provider_name,
                    status_code=0,
                    message=f"{type(exc).__name__}: {exc}",
                ) from exc

            if response.status_code != 200:
                self._raise_provider_error(response)

            try:
                data = response.json()
            except json.JSONDecodeError as exc:
                raise ChatProviderError(
                    provider=self.provider_name,
                    status_code=response.status_code,
                    message=f"Invalid JSON body: {exc}",
                ) from exc

            if not isinstance(data, dict):
                raise ChatProviderError(
                    provider=self.provider_name,
                    status_code=response.status_code,
                    message=f"Unexpected response body: {type(data).__name__}",
                )
            if "error" in data:
                raise ChatProviderError(
                    provider=self.provider_name,
                    status_code=response.status_code,
                    message=str(data["error"]),
                )

            logger.debug(
                "Ollama chat done: model=%s prompt_eval_count=%s eval_count=%s",
                data.get("model"),
                data.get("prompt_eval_count"),
                data.get("eval_count"),
            )
            return data

        finally:
            if should_close:
                await client.aclose()

    async def aclose(self) -> None:
        """Close the injected http client, if any."""
        if self._http_client is not None:
            await self._http_client.aclose()

    def _raise_provider_error(self, response: httpx.Response) -> None:
        """Raise ChatProviderError from a non-200 httpx Response."""
        try:
            data = response.json()
            message = data.get("error", response.text)
        except (json.JSONDecodeError, AttributeError):
            message = response.text

        raise ChatProviderError(
            provider=self.provider_name,
            status_code=response.status_code,
            message=str(message),
        )
