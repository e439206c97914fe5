from __future__ import annotations

import pytest

from souq_api.core.settings import Settings
from souq_api.domain.ai.provider_registry import (
    NoProviderAvailableError,
    ProviderDescriptor,
    ProviderKind,
    ProviderRegistry,
    TTSProviderKind,
)
from souq_api.services.ai.bootstrap import build_provider_registry
from souq_api.services.ai.elevenlabs_provider import ElevenLabsProvider
from souq_api.services.ai.gemini_provider import GeminiProvider
from souq_api.services.ai.openai_provider import OpenAIProvider


def test_resolves_registered_provider_by_string_or_kind(scripted_provider):
    registry = ProviderRegistry()
    openai = scripted_provider(ProviderKind.OPENAI)
    gemini = scripted_provider(ProviderKind.GEMINI)
    registry.register_conversational_provider(openai)
    registry.register_conversational_provider(gemini)

    assert registry.get_conversational_provider("gemini") is gemini
    assert registry.get_conversational_provider(ProviderKind.GEMINI) is gemini
    assert registry.get_conversational_provider() is openai


def test_unknown_id_falls_back_to_first_registered(scripted_provider):
    registry = ProviderRegistry()
    gemini = scripted_provider(ProviderKind.GEMINI)
    registry.register_conversational_provider(gemini)

    assert registry.get_conversational_provider("does-not-exist") is gemini
    # the default "openai" is not registered either
    assert registry.get_conversational_provider() is gemini
    assert registry.get_conversational_provider(ProviderKind.OPENAI) is gemini


def test_empty_namespace_raises():
    registry = ProviderRegistry()

    with pytest.raises(NoProviderAvailableError):
        registry.get_conversational_provider("openai")
    with pytest.raises(NoProviderAvailableError):
        registry.get_tts_provider()


def test_reregistering_a_kind_replaces_the_provider(scripted_provider):
    registry = ProviderRegistry()
    first = scripted_provider(ProviderKind.OPENAI)
    second = scripted_provider(ProviderKind.OPENAI)
    registry.register_conversational_provider(first)
    registry.register_conversational_provider(second)

    assert registry.get_conversational_provider("openai") is second
    assert len(registry.conversational) == 1


def test_lists_descriptors_in_registration_order(scripted_provider):
    registry = ProviderRegistry()
    registry.register_conversational_provider(scripted_provider(ProviderKind.GEMINI))
    registry.register_conversational_provider(scripted_provider(ProviderKind.OPENAI))

    assert registry.list_conversational_providers() == (
        ProviderDescriptor(id="gemini", name="Scripted gemini"),
        ProviderDescriptor(id="openai", name="Scripted openai"),
    )
    assert registry.list_tts_providers() == ()


def test_namespace_membership(scripted_provider):
    registry = ProviderRegistry()
    registry.register_conversational_provider(scripted_provider(ProviderKind.OPENAI))

    assert "openai" in registry.conversational
    assert ProviderKind.GEMINI not in registry.conversational
    assert "bogus" not in registry.conversational


def test_build_provider_registry_registers_builtin_providers_without_keys():
    registry = build_provider_registry(
        Settings(openai_api_key=None, gemini_api_key=None, elevenlabs_api_key=None, tracing_enabled=False)
    )

    assert isinstance(registry.get_conversational_provider("openai"), OpenAIProvider)
    assert isinstance(registry.get_conversational_provider("gemini"), GeminiProvider)
    assert isinstance(registry.get_tts_provider(TTSProviderKind.ELEVENLABS), ElevenLabsProvider)
    assert [descriptor.as_payload() for descriptor in registry.list_conversational_providers()] == [
        {"id": "openai", "name": "OpenAI (GPT-4o)"},
        {"id": "gemini", "name": "Google Gemini (2.5 Flash)"},
    ]


def test_build_provider_registry_honours_configured_default():
    registry = build_provider_registry(Settings(default_conversational_provider="gemini", tracing_enabled=False))

    assert isinstance(registry.get_conversational_provider(), GeminiProvider)
