"""Pydantic contracts exchanged with conversational providers and the admin UI."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Word ceilings the hero banner layout can hold without wrapping.
BANNER_WORD_LIMITS: Dict[str, int] = {
    "badge_text": 4,
    "main_title": 2,
    "highlight_title": 2,
    "subtitle": 3,
    "button_text": 3,
    "footer_text": 6,
}
BANNER_DESCRIPTION_MAX_CHARS = 100


class CamelModel(BaseModel):
    """Base model accepting snake_case or camelCase and emitting camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ProductSnapshot(CamelModel):
    """Read-only view of a catalog product handed to the AI providers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int | None = None
    name: str
    brand: str
    category: str
    original_price: Decimal
    discounted_price: Decimal
    discount: int = Field(ge=0, le=100)
    stock: int = 0
    image: str | None = None

    @property
    def savings(self) -> Decimal:
        return self.original_price - self.discounted_price

    def prompt_fields(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "brand": self.brand,
            "category": self.category,
            "originalPrice": str(self.original_price),
            "discountedPrice": str(self.discounted_price),
            "discount": self.discount,
            "stock": self.stock,
        }


class ProductAnalysis(CamelModel):
    luxury_score: int
    discount_appeal: int
    target_audience: str
    selling_points: List[str] = Field(default_factory=list)
    competitive_advantages: List[str] = Field(default_factory=list)
    emotional_hooks: List[str] = Field(default_factory=list)

    @field_validator("luxury_score", "discount_appeal", mode="before")
    @classmethod
    def _clamp_score(cls, value: object) -> object:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return max(0, min(100, round(value)))
        return value


class MarketingContent(CamelModel):
    badge_text: str
    main_title: str
    highlight_title: str
    subtitle: str
    description: str
    button_text: str
    footer_text: str
    urgency_tactics: List[str] = Field(default_factory=list)
    emotional_triggers: List[str] = Field(default_factory=list)
    sales_techniques: List[str] = Field(default_factory=list)

    def constraint_violations(self) -> List[str]:
        """Return the camelCase names of fields exceeding the banner layout ceilings."""

        violations: List[str] = []
        for field_name, limit in BANNER_WORD_LIMITS.items():
            if len(getattr(self, field_name).split()) > limit:
                violations.append(to_camel(field_name))
        if len(self.description) >= BANNER_DESCRIPTION_MAX_CHARS:
            violations.append("description")
        return violations


class ProductDescriptions(CamelModel):
    short_description: str
    long_description: str
    selling_points: List[str] = Field(default_factory=list)
    urgency_text: str


class DualAIResult(CamelModel):
    openai_content: MarketingContent
    gemini_content: MarketingContent
    best_content: MarketingContent
    comparison: str


__all__ = [
    "BANNER_DESCRIPTION_MAX_CHARS",
    "BANNER_WORD_LIMITS",
    "CamelModel",
    "DualAIResult",
    "MarketingContent",
    "ProductAnalysis",
    "ProductDescriptions",
    "ProductSnapshot",
]
