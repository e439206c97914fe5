from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from souq_api.models.hero_banner import DEFAULT_BANNER_COPY

from .marketing import CamelModel


class HeroBannerRecord(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int | None = None
    badge_icon: str | None = None
    badge_text: str | None = None
    main_title: str | None = None
    highlight_title: str | None = None
    subtitle: str | None = None
    description: str | None = None
    button_text: str | None = None
    footer_text: str | None = None
    is_active: bool = True
    updated_at: datetime | None = None

    @classmethod
    def defaults(cls) -> "HeroBannerRecord":
        return cls(**DEFAULT_BANNER_COPY)


def default_banner_payload() -> Dict[str, Any]:
    return HeroBannerRecord.defaults().to_payload()


__all__ = ["HeroBannerRecord", "default_banner_payload"]
