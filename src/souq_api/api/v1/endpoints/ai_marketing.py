"""Admin endpoints for AI-assisted marketing copy and speech.

Provider failures never surface as errors here: each endpoint logs the
failure and answers with static placeholder content flagged
``fallback: true`` so the admin UI always has something to render.
"""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from loguru import logger
from pydantic import Field, ValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from souq_api.api.dependencies.security import require_admin_api_key
from souq_api.api.dependencies.services import get_marketing_orchestrator, get_provider_registry
from souq_api.db.session import get_session
from souq_api.domain.ai.provider_registry import NoProviderAvailableError, ProviderKind, ProviderRegistry
from souq_api.models.hero_banner import HeroBanner
from souq_api.models.product import Product
from souq_api.schemas.hero_banner import HeroBannerRecord
from souq_api.schemas.marketing import CamelModel, ProductSnapshot
from souq_api.services.ai.errors import ProviderError
from souq_api.services.marketing.fallbacks import (
    APPLY_BANNER_DEFAULTS,
    FALLBACK_ANALYSIS,
    FALLBACK_BANNER_CONTENT,
    FALLBACK_DUAL_RESULT,
    fallback_product_descriptions,
)
from souq_api.services.marketing.orchestrator import MarketingOrchestrationError, MarketingOrchestrator

router = APIRouter(
    prefix="/admin/ai-marketing",
    tags=["AI Marketing"],
    dependencies=[Depends(require_admin_api_key)],
)

AI_FAILURES = (ProviderError, MarketingOrchestrationError, NoProviderAvailableError)


class GenerateBannerRequest(CamelModel):
    ai_provider: str = ProviderKind.OPENAI.value


class ApplyBannerRequest(CamelModel):
    content: Dict[str, Any] | None = None


class OptimizeContentRequest(CamelModel):
    content: Dict[str, Any] | None = None
    performance_data: Dict[str, Any] | None = None


class SpeechRequest(CamelModel):
    text: str = ""
    voice_id: str | None = None
    provider_id: str | None = None


class ProviderDescriptorResponse(CamelModel):
    id: str
    name: str


class ProvidersResponse(CamelModel):
    conversational: List[ProviderDescriptorResponse] = Field(default_factory=list)
    tts: List[ProviderDescriptorResponse] = Field(default_factory=list)


async def _load_products(session: AsyncSession, *, purpose: str) -> List[ProductSnapshot]:
    result = await session.execute(select(Product).order_by(Product.id))
    products: List[ProductSnapshot] = []
    for product in result.scalars().all():
        try:
            products.append(ProductSnapshot.model_validate(product))
        except ValidationError as exc:
            logger.warning(
                "Skipping catalog product that does not fit the AI snapshot",
                product_id=product.id,
                error_count=exc.error_count(),
            )
    if not products:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"No products available for {purpose}",
        )
    return products


def _log_fallback(operation: str, exc: Exception) -> None:
    logger.warning(
        "AI marketing call failed; serving fallback content",
        operation=operation,
        provider_id=getattr(exc, "provider_id", None),
        error=str(exc),
    )


@router.post("/analyze", summary="Analyze the product catalog")
async def analyze_products(
    session: AsyncSession = Depends(get_session),
    orchestrator: MarketingOrchestrator = Depends(get_marketing_orchestrator),
) -> Dict[str, Any]:
    products = await _load_products(session, purpose="analysis")
    try:
        analysis = await orchestrator.analyze_products(products)
    except AI_FAILURES as exc:
        _log_fallback("analyze", exc)
        return {"analysis": FALLBACK_ANALYSIS.to_payload(), "fallback": True}
    return {"analysis": analysis.to_payload(), "fallback": False}


@router.post("/generate-banner", summary="Generate hero banner copy")
async def generate_banner(
    payload: GenerateBannerRequest | None = None,
    session: AsyncSession = Depends(get_session),
    orchestrator: MarketingOrchestrator = Depends(get_marketing_orchestrator),
) -> Dict[str, Any]:
    ai_provider = (payload or GenerateBannerRequest()).ai_provider
    products = await _load_products(session, purpose="content generation")
    try:
        if ai_provider == ProviderKind.GEMINI.value:
            content = await orchestrator.generate_hero_banner_content_with_gemini(products)
        else:
            content = await orchestrator.generate_hero_banner_content(products)
    except AI_FAILURES as exc:
        _log_fallback("generate-banner", exc)
        return {"content": FALLBACK_BANNER_CONTENT.to_payload(), "provider": ai_provider, "fallback": True}
    return {"content": content.to_payload(), "provider": ai_provider, "fallback": False}


@router.post("/generate-dual", summary="Generate banner copy with both providers and merge it")
async def generate_dual(
    session: AsyncSession = Depends(get_session),
    orchestrator: MarketingOrchestrator = Depends(get_marketing_orchestrator),
) -> Dict[str, Any]:
    products = await _load_products(session, purpose="content generation")
    try:
        result = await orchestrator.generate_dual_ai_content(products)
    except AI_FAILURES as exc:
        _log_fallback("generate-dual", exc)
        return {**FALLBACK_DUAL_RESULT.to_payload(), "fallback": True}
    return {**result.to_payload(), "fallback": False}


@router.post("/product-description/{product_id}", summary="Generate product descriptions")
async def generate_product_description(
    product_id: int,
    session: AsyncSession = Depends(get_session),
    orchestrator: MarketingOrchestrator = Depends(get_marketing_orchestrator),
) -> Dict[str, Any]:
    product = await session.get(Product, product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")

    snapshot = ProductSnapshot.model_validate(product)
    try:
        descriptions = await orchestrator.generate_product_descriptions(snapshot)
    except AI_FAILURES as exc:
        _log_fallback("product-description", exc)
        return {**fallback_product_descriptions(snapshot).to_payload(), "fallback": True}
    return {**descriptions.to_payload(), "fallback": False}


@router.post("/apply-banner", summary="Publish generated copy to the hero banner")
async def apply_banner(
    payload: ApplyBannerRequest,
    session: AsyncSession = Depends(get_session),
) -> Dict[str, Any]:
    content = payload.content
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No content provided")

    banner_data = {
        field: content.get(to_camel(field)) or default
        for field, default in APPLY_BANNER_DEFAULTS.items()
    }

    result = await session.execute(select(HeroBanner).where(HeroBanner.is_active.is_(True)).limit(1))
    banner = result.scalar_one_or_none()
    if banner is None:
        banner = HeroBanner(is_active=True)
        session.add(banner)
    for field, value in banner_data.items():
        setattr(banner, field, value)
    await session.commit()
    await session.refresh(banner)

    logger.info("Hero banner updated from AI content", banner_id=banner.id)
    return {
        "banner": HeroBannerRecord.model_validate(banner).to_payload(),
        "message": "AI-generated content applied successfully",
    }


@router.post("/optimize", summary="Optimize existing banner copy for conversion")
async def optimize_content(
    payload: OptimizeContentRequest,
    orchestrator: MarketingOrchestrator = Depends(get_marketing_orchestrator),
) -> Dict[str, Any]:
    if not payload.content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No content provided")
    try:
        content = await orchestrator.optimize_for_conversion(payload.content, payload.performance_data)
    except AI_FAILURES as exc:
        _log_fallback("optimize", exc)
        return {"content": FALLBACK_BANNER_CONTENT.to_payload(), "fallback": True}
    return {"content": content.to_payload(), "fallback": False}


@router.get("/providers", summary="List registered AI providers", response_model=ProvidersResponse)
async def list_providers(registry: ProviderRegistry = Depends(get_provider_registry)) -> ProvidersResponse:
    return ProvidersResponse(
        conversational=[
            ProviderDescriptorResponse(**descriptor.as_payload())
            for descriptor in registry.list_conversational_providers()
        ],
        tts=[ProviderDescriptorResponse(**descriptor.as_payload()) for descriptor in registry.list_tts_providers()],
    )


@router.post("/tts/generate", summary="Synthesize speech", response_class=Response)
async def generate_speech(
    payload: SpeechRequest,
    registry: ProviderRegistry = Depends(get_provider_registry),
) -> Response:
    if not payload.text.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Text is required")

    try:
        provider = registry.get_tts_provider(payload.provider_id)
        audio = await provider.generate_speech(payload.text, payload.voice_id)
    except AI_FAILURES as exc:
        _log_fallback("tts-generate", exc)
        return Response(content=b"", media_type="audio/mpeg", headers={"X-Content-Fallback": "true"})
    return Response(content=audio, media_type="audio/mpeg")


@router.get("/tts/voices", summary="List text-to-speech voices")
async def list_voices(
    provider_id: str | None = Query(default=None, alias="providerId"),
    registry: ProviderRegistry = Depends(get_provider_registry),
) -> Dict[str, Any]:
    try:
        provider = registry.get_tts_provider(provider_id)
        voices = await provider.get_voices()
    except AI_FAILURES as exc:
        _log_fallback("tts-voices", exc)
        return {"voices": [], "fallback": True}
    return {"voices": voices, "fallback": False}
