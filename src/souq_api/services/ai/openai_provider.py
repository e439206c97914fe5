"""OpenAI chat-completions backend for marketing copy."""

from __future__ import annotations

from typing import Any

from openai import AsyncOpenAI

from souq_api.core.settings import settings
from souq_api.domain.ai.provider_registry import ProviderKind

from .base import ConversationalProvider
from .errors import ProviderAuthenticationError


class OpenAIProvider(ConversationalProvider):
    kind = ProviderKind.OPENAI
    display_name = "OpenAI (GPT-4o)"

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        timeout_seconds: float | None = None,
        max_retries: int | None = None,
        client: Any | None = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.openai_api_key
        self.model = model or settings.openai_model
        self._timeout = timeout_seconds if timeout_seconds is not None else settings.ai_request_timeout_seconds
        self._max_retries = max_retries if max_retries is not None else settings.ai_max_retries
        self._client = client

    @property
    def client(self) -> Any:
        # Built on first use so a missing key fails the call, not application start-up.
        if self._client is None:
            if not self._api_key:
                raise ProviderAuthenticationError(
                    "OPENAI_API_KEY is not configured",
                    provider_id=self.kind.value,
                )
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                timeout=self._timeout,
                max_retries=self._max_retries,
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
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
            temperature=temperature,
            max_tokens=max_tokens,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content


__all__ = ["OpenAIProvider"]
