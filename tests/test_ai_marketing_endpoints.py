from __future__ import annotations

from decimal import Decimal

import pytest

from souq_api.core.settings import settings
from souq_api.domain.ai.provider_registry import ProviderKind, ProviderRegistry, TTSProviderKind
from souq_api.models.product import Product
from souq_api.services.ai.errors import ProviderError
from souq_api.services.marketing.fallbacks import (
    FALLBACK_ANALYSIS,
    FALLBACK_BANNER_CONTENT,
    FALLBACK_DUAL_RESULT,
)


class FakeSpeechProvider:
    kind = TTSProviderKind.ELEVENLABS
    display_name = "ElevenLabs"

    def __init__(self, *, error: Exception | None = None) -> None:
        self.error = error
        self.requests = []

    async def generate_speech(self, text, voice_id=None):
        self.requests.append((text, voice_id))
        if self.error is not None:
            raise self.error
        return b"ID3audio"

    async def get_voices(self):
        if self.error is not None:
            raise self.error
        return [{"id": "v1", "name": "Rachel", "category": "premade", "previewUrl": None, "labels": {}}]


async def _seed_products(session_factory) -> list[Product]:
    async with session_factory() as session:
        products = [
            Product(
                name="Classic Flap",
                brand="Chanel",
                category="Bags",
                original_price=Decimal("8000.00"),
                discounted_price=Decimal("5600.00"),
                discount=30,
                image="",
                stock=3,
            ),
            Product(
                name="Royal Oak",
                brand="Audemars Piguet",
                category="Watches",
                original_price=Decimal("30000.00"),
                discounted_price=Decimal("24000.00"),
                discount=20,
                image="",
                stock=1,
            ),
        ]
        session.add_all(products)
        await session.commit()
        for product in products:
            await session.refresh(product)
        return products


def _failing_registry(scripted_provider) -> ProviderRegistry:
    registry = ProviderRegistry()
    for kind in (ProviderKind.OPENAI, ProviderKind.GEMINI):
        registry.register_conversational_provider(
            scripted_provider(kind, error=ProviderError("quota exceeded", provider_id=kind.value))
        )
    registry.register_tts_provider(FakeSpeechProvider(error=ProviderError("quota exceeded")))
    return registry


@pytest.mark.asyncio
async def test_analyze_returns_provider_analysis(app_with_db, client_for):
    app, session_factory = app_with_db
    await _seed_products(session_factory)

    async with client_for(app) as client:
        response = await client.post("/api/admin/ai-marketing/analyze")

    assert response.status_code == 200
    body = response.json()
    assert body["fallback"] is False
    assert body["analysis"]["luxuryScore"] == 88
    assert body["analysis"]["targetAudience"] == "Young professionals"


@pytest.mark.asyncio
async def test_analyze_serves_fallback_when_provider_fails(app_with_db, client_for, scripted_provider):
    app, session_factory = app_with_db
    await _seed_products(session_factory)
    app.state.provider_registry = _failing_registry(scripted_provider)

    async with client_for(app) as client:
        response = await client.post("/api/admin/ai-marketing/analyze")

    assert response.status_code == 200
    assert response.json() == {"analysis": FALLBACK_ANALYSIS.to_payload(), "fallback": True}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path",
    [
        "/api/admin/ai-marketing/analyze",
        "/api/admin/ai-marketing/generate-banner",
        "/api/admin/ai-marketing/generate-dual",
    ],
)
async def test_ai_endpoints_require_products(app_with_db, client_for, path):
    app, _ = app_with_db

    async with client_for(app) as client:
        response = await client.post(path)

    assert response.status_code == 400
    assert response.json()["detail"].startswith("No products available")


@pytest.mark.asyncio
async def test_out_of_range_catalog_rows_are_skipped(app_with_db, client_for):
    app, session_factory = app_with_db
    await _seed_products(session_factory)
    async with session_factory() as session:
        session.add(
            Product(
                name="Mispriced",
                brand="Hermes",
                category="Bags",
                original_price=Decimal("100.00"),
                discounted_price=Decimal("90.00"),
                discount=150,
                image="",
                stock=2,
            )
        )
        await session.commit()

    async with client_for(app) as client:
        response = await client.post("/api/admin/ai-marketing/analyze")

    assert response.status_code == 200
    assert response.json()["fallback"] is False


@pytest.mark.asyncio
async def test_generate_banner_honours_provider_choice(app_with_db, client_for):
    app, session_factory = app_with_db
    await _seed_products(session_factory)

    async with client_for(app) as client:
        gemini = await client.post("/api/admin/ai-marketing/generate-banner", json={"aiProvider": "gemini"})
        default = await client.post("/api/admin/ai-marketing/generate-banner")

    assert gemini.status_code == 200
    assert gemini.json()["provider"] == "gemini"
    assert gemini.json()["content"]["badgeText"] == "gemini pick"
    assert gemini.json()["fallback"] is False
    assert default.json()["provider"] == "openai"
    assert default.json()["content"]["badgeText"] == "openai pick"


@pytest.mark.asyncio
async def test_generate_banner_fallback(app_with_db, client_for, scripted_provider):
    app, session_factory = app_with_db
    await _seed_products(session_factory)
    app.state.provider_registry = _failing_registry(scripted_provider)

    async with client_for(app) as client:
        response = await client.post("/api/admin/ai-marketing/generate-banner", json={"aiProvider": "gemini"})

    body = response.json()
    assert response.status_code == 200
    assert body == {"content": FALLBACK_BANNER_CONTENT.to_payload(), "provider": "gemini", "fallback": True}


def test_fallback_copy_fits_the_banner_layout():
    assert FALLBACK_BANNER_CONTENT.constraint_violations() == []
    assert FALLBACK_DUAL_RESULT.openai_content.constraint_violations() == []
    assert FALLBACK_DUAL_RESULT.gemini_content.constraint_violations() == []
    assert FALLBACK_DUAL_RESULT.best_content.constraint_violations() == []


@pytest.mark.asyncio
async def test_generate_dual_success_and_fallback(app_with_db, client_for, scripted_provider):
    app, session_factory = app_with_db
    await _seed_products(session_factory)

    async with client_for(app) as client:
        success = await client.post("/api/admin/ai-marketing/generate-dual")
        app.state.provider_registry = _failing_registry(scripted_provider)
        fallback = await client.post("/api/admin/ai-marketing/generate-dual")

    body = success.json()
    assert body["fallback"] is False
    assert body["openaiContent"]["badgeText"] == "openai pick"
    assert body["geminiContent"]["badgeText"] == "gemini pick"
    assert body["bestContent"]["badgeText"] == "Best of both"
    assert body["comparison"] == "Content generated and optimized using dual AI analysis"

    assert fallback.status_code == 200
    assert fallback.json() == {**FALLBACK_DUAL_RESULT.to_payload(), "fallback": True}


@pytest.mark.asyncio
async def test_product_description(app_with_db, client_for, scripted_provider):
    app, session_factory = app_with_db
    products = await _seed_products(session_factory)

    async with client_for(app) as client:
        missing = await client.post("/api/admin/ai-marketing/product-description/9999")
        generated = await client.post(f"/api/admin/ai-marketing/product-description/{products[0].id}")
        app.state.provider_registry = _failing_registry(scripted_provider)
        fallback = await client.post(f"/api/admin/ai-marketing/product-description/{products[1].id}")

    assert missing.status_code == 404
    assert generated.json()["shortDescription"] == "A timeless icon."
    assert generated.json()["fallback"] is False
    assert fallback.status_code == 200
    assert fallback.json()["fallback"] is True
    assert "Royal Oak" in fallback.json()["shortDescription"]
    assert fallback.json()["urgencyText"] == "Only 1 left in stock"


@pytest.mark.asyncio
async def test_apply_banner_fills_missing_fields_with_defaults(app_with_db, client_for):
    app, _ = app_with_db

    async with client_for(app) as client:
        empty = await client.post("/api/admin/ai-marketing/apply-banner", json={})
        applied = await client.post(
            "/api/admin/ai-marketing/apply-banner",
            json={"content": {"mainTitle": "ELITE", "badgeText": "", "description": "Rare finds, fair prices."}},
        )
        public = await client.get("/api/hero-banner")

    assert empty.status_code == 400
    assert applied.status_code == 200
    banner = applied.json()["banner"]
    assert applied.json()["message"] == "AI-generated content applied successfully"
    assert banner["mainTitle"] == "ELITE"
    assert banner["badgeText"] == "LIMITED TIME"
    assert banner["highlightTitle"] == "DEALS"
    assert banner["description"] == "Rare finds, fair prices."
    assert banner["footerText"] == "Free worldwide shipping"
    assert public.json()["mainTitle"] == "ELITE"


@pytest.mark.asyncio
async def test_optimize_content(app_with_db, client_for, scripted_provider):
    app, _ = app_with_db

    async with client_for(app) as client:
        missing = await client.post("/api/admin/ai-marketing/optimize", json={})
        optimized = await client.post(
            "/api/admin/ai-marketing/optimize",
            json={"content": {"mainTitle": "LUXURY"}, "performanceData": {"ctr": 0.01}},
        )
        app.state.provider_registry = _failing_registry(scripted_provider)
        fallback = await client.post("/api/admin/ai-marketing/optimize", json={"content": {"mainTitle": "LUXURY"}})

    assert missing.status_code == 400
    assert optimized.json()["fallback"] is False
    assert optimized.json()["content"]["badgeText"] == "Best of both"
    assert fallback.json() == {"content": FALLBACK_BANNER_CONTENT.to_payload(), "fallback": True}


@pytest.mark.asyncio
async def test_list_providers(app_with_db, client_for):
    app, _ = app_with_db
    app.state.provider_registry.register_tts_provider(FakeSpeechProvider())

    async with client_for(app) as client:
        response = await client.get("/api/admin/ai-marketing/providers")

    assert response.json() == {
        "conversational": [
            {"id": "openai", "name": "Scripted openai"},
            {"id": "gemini", "name": "Scripted gemini"},
        ],
        "tts": [{"id": "elevenlabs", "name": "ElevenLabs"}],
    }


@pytest.mark.asyncio
async def test_tts_generate_returns_audio(app_with_db, client_for):
    app, _ = app_with_db
    speech = FakeSpeechProvider()
    app.state.provider_registry.register_tts_provider(speech)

    async with client_for(app) as client:
        missing = await client.post("/api/admin/ai-marketing/tts/generate", json={"text": "  "})
        response = await client.post(
            "/api/admin/ai-marketing/tts/generate",
            json={"text": "Welcome to the sale", "voiceId": "v1"},
        )

    assert missing.status_code == 400
    assert response.status_code == 200
    assert response.headers["content-type"] == "audio/mpeg"
    assert response.content == b"ID3audio"
    assert "x-content-fallback" not in response.headers
    assert speech.requests == [("Welcome to the sale", "v1")]


@pytest.mark.asyncio
async def test_tts_fallbacks(app_with_db, client_for, scripted_provider):
    app, _ = app_with_db

    async with client_for(app) as client:
        # no TTS provider registered at all
        unregistered = await client.post("/api/admin/ai-marketing/tts/generate", json={"text": "Hello"})
        app.state.provider_registry = _failing_registry(scripted_provider)
        failing = await client.post("/api/admin/ai-marketing/tts/generate", json={"text": "Hello"})
        voices = await client.get("/api/admin/ai-marketing/tts/voices", params={"providerId": "elevenlabs"})

    for response in (unregistered, failing):
        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["x-content-fallback"] == "true"
    assert voices.json() == {"voices": [], "fallback": True}


@pytest.mark.asyncio
async def test_tts_voices(app_with_db, client_for):
    app, _ = app_with_db
    app.state.provider_registry.register_tts_provider(FakeSpeechProvider())

    async with client_for(app) as client:
        response = await client.get("/api/admin/ai-marketing/tts/voices")

    assert response.json()["fallback"] is False
    assert response.json()["voices"][0]["name"] == "Rachel"


@pytest.mark.asyncio
async def test_admin_key_is_enforced_when_configured(app_with_db, client_for):
    app, _ = app_with_db
    previous_key = settings.admin_api_key
    settings.admin_api_key = "admin-secret"

    try:
        async with client_for(app) as client:
            denied = await client.get("/api/admin/ai-marketing/providers")
            wrong = await client.get("/api/admin/ai-marketing/providers", headers={"X-Admin-Key": "nope"})
            allowed = await client.get(
                "/api/admin/ai-marketing/providers",
                headers={"X-Admin-Key": "admin-secret"},
            )
    finally:
        settings.admin_api_key = previous_key

    assert denied.status_code == 401
    assert wrong.status_code == 401
    assert allowed.status_code == 200
