"""ElevenLabs text-to-speech over its REST API."""

from __future__ import annotations

from typing import Any, Dict, List

import httpx
from loguru import logger

from souq_api.core.settings import settings
from souq_api.domain.ai.provider_registry import TTSProviderKind

from .base import TextToSpeechProvider
from .errors import ProviderAuthenticationError, ProviderError


class ElevenLabsProvider(TextToSpeechProvider):
    kind = TTSProviderKind.ELEVENLABS
    display_name = "ElevenLabs"

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        model_id: str | None = None,
        default_voice_id: str | None = None,
        timeout_seconds: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.elevenlabs_api_key
        self._base_url = (base_url or settings.elevenlabs_base_url).rstrip("/")
        self.model_id = model_id or settings.elevenlabs_model_id
        self.default_voice_id = default_voice_id or settings.elevenlabs_default_voice_id
        self._timeout = timeout_seconds if timeout_seconds is not None else settings.ai_request_timeout_seconds
        self._http_client = http_client

    def _headers(self, *, accept: str) -> Dict[str, str]:
        if not self._api_key:
            raise ProviderAuthenticationError(
                "ELEVENLABS_API_KEY is not configured",
                provider_id=self.kind.value,
            )
        return {"xi-api-key": self._api_key, "Accept": accept}

    def _client(self) -> tuple[httpx.AsyncClient, bool]:
        if self._http_client is not None:
            return self._http_client, False
        return httpx.AsyncClient(timeout=self._timeout), True

    async def generate_speech(self, text: str, voice_id: str | None = None) -> bytes:
        voice = voice_id or self.default_voice_id
        headers = self._headers(accept="audio/mpeg")
        url = f"{self._base_url}/v1/text-to-speech/{voice}/stream"
        body = {"text": text, "model_id": self.model_id}

        client, close_client = self._client()
        chunks: List[bytes] = []
        try:
            async with client.stream("POST", url, json=body, headers=headers) as response:
                response.raise_for_status()
                async for chunk in response.aiter_bytes():
                    chunks.append(chunk)
        except httpx.HTTPError as exc:
            logger.exception("ElevenLabs speech generation failed", voice_id=voice, error=str(exc))
            raise ProviderError(
                "Failed to generate speech with ElevenLabs",
                provider_id=self.kind.value,
            ) from exc
        finally:
            if close_client:
                await client.aclose()

        audio = b"".join(chunks)
        logger.info("ElevenLabs speech generated", voice_id=voice, bytes=len(audio), chunks=len(chunks))
        return audio

    async def get_voices(self) -> List[Dict[str, Any]]:
        headers = self._headers(accept="application/json")
        client, close_client = self._client()
        try:
            response = await client.get(f"{self._base_url}/v1/voices", headers=headers)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.exception("ElevenLabs voice listing failed", error=str(exc))
            raise ProviderError(
                "Failed to fetch voices from ElevenLabs",
                provider_id=self.kind.value,
            ) from exc
        finally:
            if close_client:
                await client.aclose()

        voices = payload.get("voices", []) if isinstance(payload, dict) else []
        return [_normalize_voice(voice) for voice in voices if isinstance(voice, dict)]


def _normalize_voice(voice: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": voice.get("voice_id"),
        "name": voice.get("name"),
        "category": voice.get("category"),
        "previewUrl": voice.get("preview_url"),
        "labels": voice.get("labels") or {},
    }


__all__ = ["ElevenLabsProvider"]
