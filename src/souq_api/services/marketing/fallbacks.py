"""Static placeholder copy served when the AI providers are unavailable.

Every banner payload here stays inside the banner layout ceilings so the
storefront renders it unchanged.
"""

from __future__ import annotations

from typing import Dict

from souq_api.schemas.marketing import (
    DualAIResult,
    MarketingContent,
    ProductAnalysis,
    ProductDescriptions,
    ProductSnapshot,
)

FALLBACK_ANALYSIS = ProductAnalysis(
    luxury_score=85,
    discount_appeal=92,
    target_audience=(
        "Affluent professionals and luxury enthusiasts seeking authentic designer items at exceptional value"
    ),
    selling_points=[
        "Authentic luxury brands at 50-70% off retail prices",
        "Limited-time exclusive access to premium designer goods",
        "Curated selection of high-end products from trusted sources",
    ],
    competitive_advantages=[
        "Unmatched discount percentages on genuine luxury items",
        "Quick commerce delivery for immediate gratification",
        "Expert curation ensuring only the finest luxury pieces",
    ],
    emotional_hooks=[
        "Own luxury pieces you've always dreamed of at accessible prices",
        "Join an exclusive community of smart luxury shoppers",
        "Don't miss out on these once-in-a-lifetime deals",
    ],
)

FALLBACK_BANNER_CONTENT = MarketingContent(
    badge_text="LIMITED TIME",
    main_title="LUXURY",
    highlight_title="UNLEASHED",
    subtitle="Exclusive Savings",
    description="Authentic luxury brands at incredible discounts. Limited stock, unlimited style.",
    button_text="Shop Now",
    footer_text="Free worldwide shipping",
    urgency_tactics=["Limited inventory remaining", "24-hour flash sale", "Exclusive member pricing"],
    emotional_triggers=["Own luxury you deserve", "Join exclusive community", "Transform your lifestyle"],
    sales_techniques=["Social proof", "Scarcity marketing", "Value anchoring"],
)

FALLBACK_DUAL_RESULT = DualAIResult(
    openai_content=MarketingContent(
        badge_text="FLASH SALE",
        main_title="PREMIUM",
        highlight_title="LUXURY",
        subtitle="Designer Deals",
        description="Authentic luxury goods at unbeatable prices. Shop premium brands with confidence.",
        button_text="Shop Now",
        footer_text="Satisfaction guaranteed",
        urgency_tactics=["Limited time", "While supplies last", "Members only"],
        emotional_triggers=["Exclusive access", "Premium lifestyle", "Smart shopping"],
        sales_techniques=["Value proposition", "Trust building", "FOMO creation"],
    ),
    gemini_content=MarketingContent(
        badge_text="EXCLUSIVE",
        main_title="ELITE",
        highlight_title="COLLECTION",
        subtitle="Luxury Redefined",
        description="The world's finest luxury brands at remarkable savings.",
        button_text="Explore",
        footer_text="Worldwide express delivery",
        urgency_tactics=["VIP access", "Limited quantities", "Today only"],
        emotional_triggers=["Prestige ownership", "Elite status", "Lifestyle upgrade"],
        sales_techniques=["Exclusivity appeal", "Quality emphasis", "Premium positioning"],
    ),
    best_content=MarketingContent(
        badge_text="EXCLUSIVE SALE",
        main_title="LUXURY",
        highlight_title="UNLEASHED",
        subtitle="Designer Deals",
        description="Authentic luxury brands at unbeatable prices with worldwide express delivery.",
        button_text="Shop Now",
        footer_text="Satisfaction guaranteed worldwide",
        urgency_tactics=["Limited time VIP access", "While premium stock lasts", "Exclusive member pricing"],
        emotional_triggers=["Own luxury you deserve", "Join elite community", "Premium lifestyle upgrade"],
        sales_techniques=["Value-driven exclusivity", "Trust-based premium positioning", "Smart luxury shopping"],
    ),
    comparison="Optimized content combining the best elements from both AI providers for maximum conversion impact",
)

# Defaults applied to hero banner fields an admin submits empty.
APPLY_BANNER_DEFAULTS: Dict[str, str] = {
    "badge_text": "LIMITED TIME",
    "main_title": "LUXURY",
    "highlight_title": "DEALS",
    "subtitle": "Exclusive Savings",
    "description": "Discover authentic luxury brands at incredible discounts.",
    "button_text": "Shop Now",
    "footer_text": "Free worldwide shipping",
}


def fallback_product_descriptions(product: ProductSnapshot) -> ProductDescriptions:
    """Template copy for one product built from its catalog fields."""

    urgency = (
        f"Only {product.stock} left in stock" if 0 < product.stock <= 5 else "Limited availability at this price"
    )
    return ProductDescriptions(
        short_description=f"Authentic {product.brand} {product.name} at {product.discount}% off.",
        long_description=(
            f"Own the {product.name} by {product.brand}, an authenticated piece from our "
            f"{product.category.lower()} collection. Originally ${product.original_price:,.2f}, "
            f"now ${product.discounted_price:,.2f}. Every item is inspected before it ships."
        ),
        selling_points=[
            f"Genuine {product.brand}",
            f"Save ${product.savings:,.2f}",
            f"{product.discount}% below retail",
            "Inspected and authenticated",
        ],
        urgency_text=urgency,
    )


__all__ = [
    "APPLY_BANNER_DEFAULTS",
    "FALLBACK_ANALYSIS",
    "FALLBACK_BANNER_CONTENT",
    "FALLBACK_DUAL_RESULT",
    "fallback_product_descriptions",
]
