"""Shared contracts for conversational and text-to-speech providers.

Conversational vendors only differ in how a prompt reaches their API, so the
four marketing operations live here and each vendor implements
``_complete_json``. Everything a vendor returns goes through the same
parse-and-validate path: empty text, invalid JSON and mis-shaped objects are
errors, never an empty success.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Mapping, Sequence, Type, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

from souq_api.domain.ai.provider_registry import ProviderKind, TTSProviderKind
from souq_api.schemas.marketing import (
    MarketingContent,
    ProductAnalysis,
    ProductDescriptions,
    ProductSnapshot,
)
from souq_api.services.marketing.prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    BANNER_SYSTEM_PROMPT,
    DESCRIPTION_SYSTEM_PROMPT,
    OPTIMIZATION_SYSTEM_PROMPT,
    build_analysis_prompt,
    build_banner_prompt,
    build_description_prompt,
    build_optimization_prompt,
)

from .errors import ProviderError, ProviderResponseError

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_json_object(raw: str | None, *, provider_name: str, provider_id: str) -> Dict[str, Any]:
    """Decode a provider's JSON-mode answer into a dict, rejecting empty or non-object output."""

    if raw is None or not raw.strip():
        raise ProviderResponseError(f"{provider_name} returned an empty response", provider_id=provider_id)
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ProviderResponseError(
            f"{provider_name} returned a response that is not valid JSON",
            provider_id=provider_id,
        ) from exc
    if not isinstance(payload, dict):
        raise ProviderResponseError(
            f"{provider_name} returned JSON {type(payload).__name__}, expected an object",
            provider_id=provider_id,
        )
    return payload


class ConversationalProvider(ABC):
    """Marketing copy generation on top of one JSON-mode LLM endpoint."""

    kind: ClassVar[ProviderKind]
    display_name: ClassVar[str]

    @abstractmethod
    async def _complete_json(
        self,
        prompt: str,
        system_prompt: str,
        *,
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        """Send one prompt in JSON response mode and return the raw text."""

    async def analyze_products(self, products: Sequence[ProductSnapshot]) -> ProductAnalysis:
        logger.info("Starting product analysis", provider_id=self.kind.value, product_count=len(products))
        return await self._generate(
            "analyze products",
            build_analysis_prompt(products),
            ANALYSIS_SYSTEM_PROMPT,
            ProductAnalysis,
            temperature=0.7,
            max_tokens=1000,
        )

    async def generate_hero_banner(
        self,
        products: Sequence[ProductSnapshot],
        analysis: ProductAnalysis | None = None,
    ) -> MarketingContent:
        product_analysis = analysis or await self.analyze_products(products)
        content = await self._generate(
            "generate marketing content",
            build_banner_prompt(products, product_analysis),
            BANNER_SYSTEM_PROMPT,
            MarketingContent,
            temperature=0.8,
            max_tokens=1500,
        )
        self._report_constraint_violations(content, operation="generate_hero_banner")
        return content

    async def generate_product_descriptions(self, product: ProductSnapshot) -> ProductDescriptions:
        return await self._generate(
            "generate product descriptions",
            build_description_prompt(product),
            DESCRIPTION_SYSTEM_PROMPT,
            ProductDescriptions,
            temperature=0.7,
            max_tokens=800,
        )

    async def optimize_content(
        self,
        current_content: Any,
        performance_data: Mapping[str, Any] | None = None,
    ) -> MarketingContent:
        content = await self._generate(
            "optimize content",
            build_optimization_prompt(current_content, performance_data),
            OPTIMIZATION_SYSTEM_PROMPT,
            MarketingContent,
            temperature=0.6,
            max_tokens=1200,
        )
        self._report_constraint_violations(content, operation="optimize_content")
        return content

    async def _generate(
        self,
        operation: str,
        prompt: str,
        system_prompt: str,
        model_cls: Type[ModelT],
        *,
        temperature: float,
        max_tokens: int,
    ) -> ModelT:
        provider_id = self.kind.value
        try:
            raw = await self._complete_json(
                prompt,
                system_prompt,
                temperature=temperature,
                max_tokens=max_tokens,
            )
            payload = parse_json_object(raw, provider_name=self.display_name, provider_id=provider_id)
            return model_cls.model_validate(payload)
        except ProviderError as exc:
            logger.error("AI provider call failed", provider_id=provider_id, operation=operation, error=str(exc))
            raise
        except ValidationError as exc:
            logger.error(
                "AI provider returned an unexpected shape",
                provider_id=provider_id,
                operation=operation,
                expected=model_cls.__name__,
                error_count=exc.error_count(),
            )
            raise ProviderResponseError(
                f"{self.display_name} returned an unexpected {model_cls.__name__} payload",
                provider_id=provider_id,
            ) from exc
        except Exception as exc:
            logger.exception("AI provider call failed", provider_id=provider_id, operation=operation)
            raise ProviderError(
                f"Failed to {operation} with {self.display_name}",
                provider_id=provider_id,
            ) from exc

    def _report_constraint_violations(self, content: MarketingContent, *, operation: str) -> None:
        violations = content.constraint_violations()
        if violations:
            logger.warning(
                "Marketing content exceeds banner layout limits",
                provider_id=self.kind.value,
                operation=operation,
                fields=violations,
            )


class TextToSpeechProvider(ABC):
    """Speech synthesis backend returning whole audio buffers."""

    kind: ClassVar[TTSProviderKind]
    display_name: ClassVar[str]

    @abstractmethod
    async def generate_speech(self, text: str, voice_id: str | None = None) -> bytes:
        """Synthesize ``text`` and return the complete audio payload."""

    @abstractmethod
    async def get_voices(self) -> List[Dict[str, Any]]:
        """Return the voices available to the account."""


__all__ = ["ConversationalProvider", "TextToSpeechProvider", "parse_json_object"]
