from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, func

from souq_api.db.base import Base

DEFAULT_BANNER_COPY = {
    "badge_icon": "Sparkles",
    "badge_text": "Luxury at unprecedented prices",
    "main_title": "Premium",
    "highlight_title": "Luxury",
    "subtitle": "Made Accessible",
    "description": (
        "Discover authenticated luxury brands at up to 70% off. "
        "Curated collections from the world's finest houses."
    ),
    "button_text": "Explore Collection",
    "footer_text": "Free shipping on orders over $200",
}


class HeroBanner(Base):
    __tablename__ = "hero_banner"

    id = Column(Integer, primary_key=True, autoincrement=True)
    badge_icon = Column(String, nullable=True, default=DEFAULT_BANNER_COPY["badge_icon"])
    badge_text = Column(String, nullable=True, default=DEFAULT_BANNER_COPY["badge_text"])
    main_title = Column(String, nullable=True, default=DEFAULT_BANNER_COPY["main_title"])
    highlight_title = Column(String, nullable=True, default=DEFAULT_BANNER_COPY["highlight_title"])
    subtitle = Column(String, nullable=True, default=DEFAULT_BANNER_COPY["subtitle"])
    description = Column(Text, nullable=True, default=DEFAULT_BANNER_COPY["description"])
    button_text = Column(String, nullable=True, default=DEFAULT_BANNER_COPY["button_text"])
    footer_text = Column(String, nullable=True, default=DEFAULT_BANNER_COPY["footer_text"])
    is_active = Column(Boolean, nullable=False, default=True, server_default="1")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
