"""Admin management of outbound order webhooks."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from souq_api.api.dependencies.security import require_admin_api_key
from souq_api.api.dependencies.services import get_webhook_service
from souq_api.db.session import get_session
from souq_api.models.webhook import Webhook
from souq_api.schemas.webhooks import WebhookPayloadIn, WebhookRecord
from souq_api.services.webhooks import WebhookDispatchService, WebhookSubscription

router = APIRouter(
    prefix="/admin/webhooks",
    tags=["Webhooks"],
    dependencies=[Depends(require_admin_api_key)],
)


async def _get_webhook_or_404(session: AsyncSession, webhook_id: int) -> Webhook:
    webhook = await session.get(Webhook, webhook_id)
    if webhook is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Webhook not found")
    return webhook


@router.get("", summary="List webhooks", response_model=List[WebhookRecord])
async def list_webhooks(session: AsyncSession = Depends(get_session)) -> List[WebhookRecord]:
    result = await session.execute(select(Webhook).order_by(Webhook.id))
    return [WebhookRecord.model_validate(webhook) for webhook in result.scalars().all()]


@router.post(
    "",
    summary="Register webhook",
    response_model=WebhookRecord,
    status_code=status.HTTP_201_CREATED,
)
async def create_webhook(
    payload: WebhookPayloadIn,
    session: AsyncSession = Depends(get_session),
) -> WebhookRecord:
    webhook = Webhook(**payload.model_dump())
    session.add(webhook)
    await session.commit()
    await session.refresh(webhook)
    logger.info("Webhook registered", webhook_id=webhook.id, events=webhook.events)
    return WebhookRecord.model_validate(webhook)


@router.put("/{webhook_id}", summary="Replace webhook", response_model=WebhookRecord)
async def update_webhook(
    webhook_id: int,
    payload: WebhookPayloadIn,
    session: AsyncSession = Depends(get_session),
) -> WebhookRecord:
    webhook = await _get_webhook_or_404(session, webhook_id)
    for field, value in payload.model_dump().items():
        setattr(webhook, field, value)
    await session.commit()
    await session.refresh(webhook)
    logger.info("Webhook updated", webhook_id=webhook.id, is_active=webhook.is_active)
    return WebhookRecord.model_validate(webhook)


@router.delete("/{webhook_id}", summary="Delete webhook")
async def delete_webhook(webhook_id: int, session: AsyncSession = Depends(get_session)) -> Dict[str, str]:
    webhook = await _get_webhook_or_404(session, webhook_id)
    await session.delete(webhook)
    await session.commit()
    logger.info("Webhook deleted", webhook_id=webhook_id)
    return {"message": "Webhook deleted successfully"}


@router.post("/{webhook_id}/test", summary="Send a signed test event")
async def test_webhook(
    webhook_id: int,
    session: AsyncSession = Depends(get_session),
    service: WebhookDispatchService = Depends(get_webhook_service),
) -> Dict[str, Any]:
    webhook = await _get_webhook_or_404(session, webhook_id)
    result = await service.send_test_event(WebhookSubscription.from_model(webhook))
    if not result.delivered:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "message": "Webhook endpoint returned error",
                "status": result.status_code,
                "error": result.error,
            },
        )
    return {"message": "Test webhook sent successfully", "status": result.status_code}
