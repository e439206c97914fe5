"""Coordinates conversational providers into the marketing workflows used by the admin UI."""

from __future__ import annotations

import asyncio
from typing import Any, Mapping, Sequence

from loguru import logger

from souq_api.core.settings import get_settings
from souq_api.domain.ai.provider_registry import ProviderKind, ProviderRegistry
from souq_api.schemas.marketing import (
    DualAIResult,
    MarketingContent,
    ProductAnalysis,
    ProductDescriptions,
    ProductSnapshot,
)
from souq_api.services.ai.base import ConversationalProvider

DUAL_AI_COMPARISON = "Content generated and optimized using dual AI analysis"
ARBITRATION_CONTEXT = "Select best elements from both"


class MarketingOrchestrationError(RuntimeError):
    """Raised when a multi-provider workflow cannot produce a complete result."""


def _require_products(products: Sequence[ProductSnapshot]) -> None:
    if not products:
        raise ValueError("At least one product is required to generate marketing content")


class MarketingOrchestrator:
    """Routes each marketing operation to the provider configured for it."""

    def __init__(
        self,
        registry: ProviderRegistry,
        *,
        analysis_provider: ProviderKind | str | None = None,
        arbitration_provider: ProviderKind | str | None = None,
    ) -> None:
        settings = get_settings()
        self._registry = registry
        self._analysis_provider = analysis_provider or settings.analysis_provider
        self._arbitration_provider = arbitration_provider or settings.arbitration_provider

    def _provider(self, provider_id: ProviderKind | str | None) -> ConversationalProvider:
        return self._registry.get_conversational_provider(provider_id)

    async def analyze_products(self, products: Sequence[ProductSnapshot]) -> ProductAnalysis:
        _require_products(products)
        return await self._provider(self._analysis_provider).analyze_products(products)

    async def generate_hero_banner_content(
        self,
        products: Sequence[ProductSnapshot],
        analysis: ProductAnalysis | None = None,
        provider_id: ProviderKind | str | None = None,
    ) -> MarketingContent:
        _require_products(products)
        provider = self._provider(provider_id or ProviderKind.OPENAI)
        return await provider.generate_hero_banner(products, analysis)

    async def generate_hero_banner_content_with_gemini(
        self,
        products: Sequence[ProductSnapshot],
    ) -> MarketingContent:
        return await self.generate_hero_banner_content(products, provider_id=ProviderKind.GEMINI)

    async def generate_dual_ai_content(self, products: Sequence[ProductSnapshot]) -> DualAIResult:
        """Generate banner copy with both vendors concurrently, then merge the two drafts.

        Each side runs its own analysis. A failure on either side, or during
        arbitration, fails the whole operation; no side is ever substituted.
        """

        _require_products(products)
        openai_provider = self._provider(ProviderKind.OPENAI)
        gemini_provider = self._provider(ProviderKind.GEMINI)
        logger.info("Starting dual AI banner generation", product_count=len(products))

        tasks = [
            asyncio.create_task(openai_provider.generate_hero_banner(products)),
            asyncio.create_task(gemini_provider.generate_hero_banner(products)),
        ]
        try:
            openai_content, gemini_content = await asyncio.gather(*tasks)
        except Exception as exc:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.error("Dual AI banner generation failed", error=str(exc))
            raise MarketingOrchestrationError("Failed to generate dual AI content") from exc

        try:
            best_content = await self.select_best_content(openai_content, gemini_content, products)
        except Exception as exc:
            logger.error("Dual AI arbitration failed", error=str(exc))
            raise MarketingOrchestrationError("Failed to select best dual AI content") from exc

        return DualAIResult(
            openai_content=openai_content,
            gemini_content=gemini_content,
            best_content=best_content,
            comparison=DUAL_AI_COMPARISON,
        )

    async def select_best_content(
        self,
        openai_content: MarketingContent,
        gemini_content: MarketingContent,
        products: Sequence[ProductSnapshot],
    ) -> MarketingContent:
        arbitrator = self._provider(self._arbitration_provider)
        return await arbitrator.optimize_content(
            {"openai": openai_content, "gemini": gemini_content},
            {"context": ARBITRATION_CONTEXT, "productCount": len(products)},
        )

    async def generate_product_descriptions(
        self,
        product: ProductSnapshot,
        provider_id: ProviderKind | str | None = None,
    ) -> ProductDescriptions:
        provider = self._provider(provider_id or ProviderKind.OPENAI)
        return await provider.generate_product_descriptions(product)

    async def optimize_for_conversion(
        self,
        current_content: Any,
        performance_data: Mapping[str, Any] | None = None,
        provider_id: ProviderKind | str | None = None,
    ) -> MarketingContent:
        provider = self._provider(provider_id or ProviderKind.OPENAI)
        return await provider.optimize_content(current_content, performance_data)


__all__ = [
    "ARBITRATION_CONTEXT",
    "DUAL_AI_COMPARISON",
    "MarketingOrchestrationError",
    "MarketingOrchestrator",
]
