"""Prompt text and catalog aggregates shared by every conversational provider."""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Sequence, Tuple

from pydantic_core import to_jsonable_python

from souq_api.schemas.marketing import ProductAnalysis, ProductSnapshot

ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert luxury marketing analyst specializing in high-conversion sales copy. "
    "Analyze product catalogs to identify the most compelling selling angles."
)
BANNER_SYSTEM_PROMPT = (
    "You are a world-class copywriter specializing in luxury goods and high-conversion sales copy. "
    "Create extremely concise marketing content that fits hero banner design constraints "
    "and drives immediate action."
)
DESCRIPTION_SYSTEM_PROMPT = (
    "You are an expert luxury product copywriter who creates descriptions that drive sales and conversions."
)
OPTIMIZATION_SYSTEM_PROMPT = (
    "You are a conversion rate optimization expert specializing in luxury e-commerce. "
    "Optimize content for maximum sales performance."
)

ANALYSIS_JSON_SHAPE = """{
  "luxuryScore": (0-100 rating of overall luxury appeal),
  "discountAppeal": (0-100 rating of discount attractiveness),
  "targetAudience": "description of ideal customer",
  "sellingPoints": ["point1", "point2", "point3"],
  "competitiveAdvantages": ["advantage1", "advantage2", "advantage3"],
  "emotionalHooks": ["hook1", "hook2", "hook3"]
}"""

MARKETING_CONTENT_JSON_SHAPE = """{
  "badgeText": "2-4 words max",
  "mainTitle": "1-2 words max",
  "highlightTitle": "1-2 words max",
  "subtitle": "2-3 words max",
  "description": "Under 100 characters emphasizing value and urgency",
  "buttonText": "2-3 words max",
  "footerText": "Under 6 words",
  "urgencyTactics": ["tactic1", "tactic2", "tactic3"],
  "emotionalTriggers": ["trigger1", "trigger2", "trigger3"],
  "salesTechniques": ["technique1", "technique2", "technique3"]
}"""

BANNER_DESIGN_REQUIREMENTS = """CRITICAL DESIGN REQUIREMENTS:
- Badge text: 2-4 words maximum (e.g., "Limited Time", "Flash Sale")
- Main title: 1-2 words maximum (e.g., "LUXURY", "PREMIUM")
- Highlight title: 1-2 words maximum (e.g., "UNLEASHED", "COLLECTION")
- Subtitle: 2-3 words maximum (e.g., "Exceptional Savings", "Made Accessible")
- Description: Under 100 characters total (e.g., "Authentic luxury brands at up to 70% off. Premium quality, unbeatable prices.")
- Button text: 2-3 words maximum (e.g., "Shop Now", "Explore Deals")
- Footer text: Under 6 words (e.g., "Free worldwide shipping", "Limited stock remaining")"""

DESCRIPTION_JSON_SHAPE = """{
  "shortDescription": "compelling 1-2 sentence description for product cards",
  "longDescription": "detailed 3-4 sentence description for product details",
  "sellingPoints": ["point1", "point2", "point3", "point4"],
  "urgencyText": "urgency message based on stock level"
}"""


@dataclass(frozen=True, slots=True)
class BannerStats:
    """Catalog aggregates quoted in the hero banner prompt."""

    product_count: int
    total_savings: Decimal
    average_discount: int
    top_brands: Tuple[str, ...]
    categories: Tuple[str, ...]


def _distinct(values: Sequence[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def compute_banner_stats(products: Sequence[ProductSnapshot]) -> BannerStats:
    count = len(products)
    total_savings = sum((product.savings for product in products), Decimal("0"))
    average_discount = round(sum(product.discount for product in products) / count) if count else 0
    return BannerStats(
        product_count=count,
        total_savings=total_savings,
        average_discount=average_discount,
        top_brands=_distinct([product.brand for product in products])[:3],
        categories=_distinct([product.category for product in products]),
    )


def format_amount(amount: Decimal) -> str:
    return f"${amount:,.2f}"


def _to_json(value: Any) -> str:
    return json.dumps(to_jsonable_python(value, by_alias=True), indent=2)


def build_analysis_prompt(products: Sequence[ProductSnapshot]) -> str:
    product_data = [product.prompt_fields() for product in products]
    return (
        "Analyze this luxury product catalog and provide insights for maximum sales conversion:\n\n"
        f"Products: {_to_json(product_data)}\n\n"
        "Please analyze and respond with JSON in this exact format:\n"
        f"{ANALYSIS_JSON_SHAPE}\n\n"
        "Focus on luxury psychology, urgency creation, and conversion optimization."
    )


def build_banner_prompt(products: Sequence[ProductSnapshot], analysis: ProductAnalysis) -> str:
    stats = compute_banner_stats(products)
    return f"""Create compelling hero banner content for a luxury e-commerce site. Use these insights:

PRODUCT ANALYSIS:
- {stats.product_count} luxury products
- Top brands: {", ".join(stats.top_brands)}
- Categories: {", ".join(stats.categories)}
- Average discount: {stats.average_discount}%
- Total savings available: {format_amount(stats.total_savings)}
- Luxury score: {analysis.luxury_score}/100
- Target audience: {analysis.target_audience}
- Key selling points: {", ".join(analysis.selling_points)}
- Emotional hooks: {", ".join(analysis.emotional_hooks)}

Create high-converting marketing copy that:
1. Creates urgent desire for luxury at discounted prices
2. Emphasizes authenticity and exclusivity
3. Uses psychological triggers for immediate action
4. Appeals to the target audience's aspirations
5. Highlights massive savings and limited availability

{BANNER_DESIGN_REQUIREMENTS}

Respond with JSON in this exact format:
{MARKETING_CONTENT_JSON_SHAPE}"""


def build_description_prompt(product: ProductSnapshot) -> str:
    return f"""Create compelling product descriptions for this luxury item:

PRODUCT: {product.name}
BRAND: {product.brand}
CATEGORY: {product.category}
ORIGINAL PRICE: {format_amount(product.original_price)}
SALE PRICE: {format_amount(product.discounted_price)}
DISCOUNT: {product.discount}%
STOCK: {product.stock} remaining

Create high-converting product copy that:
1. Emphasizes luxury, quality, and exclusivity
2. Highlights the incredible savings opportunity
3. Creates urgency with limited availability
4. Appeals to aspirational desires
5. Uses sensory and emotional language

Respond with JSON:
{DESCRIPTION_JSON_SHAPE}"""


def build_optimization_prompt(
    current_content: Any,
    performance_data: Mapping[str, Any] | None = None,
) -> str:
    sections = [
        "Optimize this marketing content for higher conversion rates:",
        f"CURRENT CONTENT: {_to_json(current_content)}",
    ]
    if performance_data:
        sections.append(f"PERFORMANCE DATA: {_to_json(performance_data)}")
    sections.append(
        "Apply advanced conversion optimization techniques:\n"
        "1. Psychological triggers (scarcity, social proof, authority)\n"
        "2. Emotional persuasion (FOMO, aspiration, status)\n"
        "3. Urgency and limited-time offers\n"
        "4. Value proposition enhancement\n"
        "5. Call-to-action optimization"
    )
    sections.append(BANNER_DESIGN_REQUIREMENTS)
    sections.append(
        "Create improved content that will increase click-through and conversion rates.\n\n"
        f"Respond with a single optimized JSON object in this exact format:\n{MARKETING_CONTENT_JSON_SHAPE}"
    )
    return "\n\n".join(sections)


__all__ = [
    "ANALYSIS_SYSTEM_PROMPT",
    "BANNER_SYSTEM_PROMPT",
    "BannerStats",
    "DESCRIPTION_SYSTEM_PROMPT",
    "OPTIMIZATION_SYSTEM_PROMPT",
    "build_analysis_prompt",
    "build_banner_prompt",
    "build_description_prompt",
    "build_optimization_prompt",
    "compute_banner_stats",
    "format_amount",
]
