from __future__ import annotations

from typing import Dict, Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from souq_api.api.dependencies.services import get_provider_registry
from souq_api.db.session import get_session
from souq_api.domain.ai.provider_registry import ProviderRegistry

router = APIRouter()


class ComponentStatus(BaseModel):
    status: Literal["ready", "disabled", "error"]
    detail: str | None = Field(default=None, description="Human readable status detail")


class ReadinessPayload(BaseModel):
    status: Literal["ready", "degraded", "error"]
    components: Dict[str, ComponentStatus]


@router.get("/readyz", summary="Service readiness", response_model=ReadinessPayload)
async def service_readiness(
    session: AsyncSession = Depends(get_session),
    registry: ProviderRegistry = Depends(get_provider_registry),
) -> ReadinessPayload:
    components: Dict[str, ComponentStatus] = {}
    status: Literal["ready", "degraded", "error"] = "ready"

    try:
        await session.execute(text("SELECT 1"))
    except Exception as exc:
        components["database"] = ComponentStatus(status="error", detail=f"Database unreachable ({exc})")
        status = "error"
    else:
        components["database"] = ComponentStatus(status="ready")

    for label, descriptors in (
        ("conversational_providers", registry.list_conversational_providers()),
        ("tts_providers", registry.list_tts_providers()),
    ):
        if descriptors:
            names = ", ".join(descriptor.id for descriptor in descriptors)
            components[label] = ComponentStatus(status="ready", detail=f"Registered: {names}")
        else:
            components[label] = ComponentStatus(status="disabled", detail="No providers registered")
            status = "degraded" if status != "error" else status

    return ReadinessPayload(status=status, components=components)
