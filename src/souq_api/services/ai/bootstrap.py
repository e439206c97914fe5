from __future__ import annotations

from souq_api.core.settings import Settings
from souq_api.domain.ai.provider_registry import ProviderRegistry

from .elevenlabs_provider import ElevenLabsProvider
from .gemini_provider import GeminiProvider
from .openai_provider import OpenAIProvider


def build_provider_registry(settings: Settings) -> ProviderRegistry:
    """Register every built-in provider; clients stay unconfigured until first use."""

    registry = ProviderRegistry(
        default_conversational_provider=settings.default_conversational_provider,
        default_tts_provider=settings.default_tts_provider,
    )
    registry.register_conversational_provider(
        OpenAIProvider(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout_seconds=settings.ai_request_timeout_seconds,
            max_retries=settings.ai_max_retries,
        )
    )
    registry.register_conversational_provider(
        GeminiProvider(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            timeout_seconds=settings.ai_request_timeout_seconds,
        )
    )
    registry.register_tts_provider(
        ElevenLabsProvider(
            api_key=settings.elevenlabs_api_key,
            base_url=settings.elevenlabs_base_url,
            model_id=settings.elevenlabs_model_id,
            default_voice_id=settings.elevenlabs_default_voice_id,
            timeout_seconds=settings.ai_request_timeout_seconds,
        )
    )
    return registry


__all__ = ["build_provider_registry"]
