from __future__ import annotations

from datetime import datetime
from typing import List

import httpx
from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .marketing import CamelModel

SUPPORTED_WEBHOOK_EVENTS = ("order.created", "order.status_changed")


class WebhookPayloadIn(CamelModel):
    """Admin-submitted webhook registration."""

    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    events: List[str] = Field(default_factory=list)
    is_active: bool = True
    secret: str | None = None

    @field_validator("url")
    @classmethod
    def _require_http_url(cls, value: str) -> str:
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise ValueError(f"Webhook URL is not valid: {exc}") from exc
        if url.scheme not in ("http", "https"):
            raise ValueError("Webhook URL must use http or https")
        if not url.host:
            raise ValueError("Webhook URL must include a host")
        return value

    @field_validator("events")
    @classmethod
    def _known_events(cls, value: List[str]) -> List[str]:
        unknown = sorted(set(value) - set(SUPPORTED_WEBHOOK_EVENTS))
        if unknown:
            raise ValueError(f"Unsupported webhook events: {', '.join(unknown)}")
        return list(dict.fromkeys(value))


class WebhookRecord(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    name: str
    url: str
    events: List[str]
    is_active: bool
    secret: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["SUPPORTED_WEBHOOK_EVENTS", "WebhookPayloadIn", "WebhookRecord"]
