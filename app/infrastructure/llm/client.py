"""OpenAI-compatible chat-completions client constrained to JSON output."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx

from app.domain.exceptions import (
    LLMException,
    LLMNotConfiguredException,
    LLMResponseException,
)

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


class LLMClient:
    """Async HTTP client for the configured chat-completions provider.

    The provider (DeepSeek when its key is set, else OpenAI) is resolved
    from Settings on every call. One httpx.AsyncClient is shared across
    requests; pass http_client to reuse the application's client or a
    mock transport in tests.
    """

    def __init__(
        self,
        settings: "Settings",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self._client = http_client
        self._owns_client = http_client is None

    def is_configured(self) -> bool:
        return self.settings.llm_provider() is not None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.llm_timeout_seconds, connect=10.0)
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.0,
    ) -> Any:
        """
        Send a system/user message pair and return the parsed JSON reply.

        Args:
            system_prompt: Instructions, including the expected JSON shape.
            user_prompt: The request content.
            temperature: Sampling temperature.

        Returns:
            The decoded JSON value of the first choice's message content.

        Raises:
            LLMNotConfiguredException: No provider key is set.
            LLMResponseException: Empty or non-JSON content.
            LLMException: Transport error, timeout or non-2xx status.
        """
        provider = self.settings.llm_provider()
        if provider is None:
            raise LLMNotConfiguredException()
        api_key, base_url, model = provider

        payload = {
            "model": model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": temperature,
            "response_format": {"type": "json_object"},
        }
        url = f"{base_url.rstrip('/')}/chat/completions"

        try:
            response = await self._get_client().post(
                url,
                json=payload,
                headers={"Authorization": f"Bearer {api_key}"},
                timeout=self.settings.llm_timeout_seconds,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise LLMException(
                "Language-model request timed out",
                "LLM_TIMEOUT",
                {"model": model, "timeout": self.settings.llm_timeout_seconds},
            ) from e
        except httpx.HTTPStatusError as e:
            raise LLMException(
                f"Language-model HTTP {e.response.status_code}",
                details={"model": model, "status_code": e.response.status_code},
            ) from e
        except httpx.RequestError as e:
            raise LLMException(f"Language-model request error: {e}", details={"model": model}) from e
        except ValueError as e:
            raise LLMResponseException("response body is not JSON") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMResponseException("missing choices[0].message.content") from e
        if not isinstance(content, str) or not content.strip():
            raise LLMResponseException("empty content")
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise LLMResponseException("invalid JSON", content) from e
