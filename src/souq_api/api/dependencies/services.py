"""Accessors for the application-scoped services built in ``create_app``."""

from __future__ import annotations

from fastapi import Depends, Request

from souq_api.domain.ai.provider_registry import ProviderRegistry
from souq_api.services.marketing.orchestrator import MarketingOrchestrator
from souq_api.services.webhooks import WebhookDispatchService


def get_provider_registry(request: Request) -> ProviderRegistry:
    return request.app.state.provider_registry


def get_marketing_orchestrator(
    registry: ProviderRegistry = Depends(get_provider_registry),
) -> MarketingOrchestrator:
    return MarketingOrchestrator(registry)


def get_webhook_service(request: Request) -> WebhookDispatchService:
    return request.app.state.webhook_service
