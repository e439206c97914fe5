"""Google Gemini backend for marketing copy (google-genai SDK, async surface)."""

from __future__ import annotations

from typing import Any

from google import genai
from google.genai import types

from souq_api.core.settings import settings
from souq_api.domain.ai.provider_registry import ProviderKind

from .base import ConversationalProvider
from .errors import ProviderAuthenticationError


class GeminiProvider(ConversationalProvider):
    kind = ProviderKind.GEMINI
    display_name = "Google Gemini (2.5 Flash)"

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        timeout_seconds: float | None = None,
        client: Any | None = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model = model or settings.gemini_model
        self._timeout = timeout_seconds if timeout_seconds is not None else settings.ai_request_timeout_seconds
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            if not self._api_key:
                raise ProviderAuthenticationError(
                    "GEMINI_API_KEY is not configured",
                    provider_id=self.kind.value,
                )
            self._client = genai.Client(
                api_key=self._api_key,
                # google-genai expects the timeout in milliseconds
                http_options=types.HttpOptions(timeout=int(self._timeout * 1000)),
            )
        return self._client

    async def _complete_json(
        self,
        prompt: str,
        system_prompt: str,
        *,
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=system_prompt,
                response_mime_type="application/json",
                temperature=temperature,
                # No max_output_tokens: 2.5 models spend part of that budget on thinking
                # and truncate the JSON answer.
            ),
        )
        return response.text


__all__ = ["GeminiProvider"]
