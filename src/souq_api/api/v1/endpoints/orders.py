"""Checkout order creation and admin status updates; both fire webhook events."""

from __future__ import annotations

import secrets
import string
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from pydantic import Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from souq_api.api.dependencies.security import require_admin_api_key
from souq_api.api.dependencies.services import get_webhook_service
from souq_api.db.session import get_session
from souq_api.models.order import Order, OrderItem, OrderStatusEnum, PaymentMethodEnum
from souq_api.models.product import Product
from souq_api.schemas.marketing import CamelModel
from souq_api.schemas.orders import OrderRecord
from souq_api.services.webhooks import WebhookDispatchService, compute_order_totals

router = APIRouter(tags=["Orders"])

_ORDER_NUMBER_ALPHABET = string.ascii_uppercase + string.digits


class OrderItemCreate(CamelModel):
    product_id: int
    quantity: int = Field(..., ge=1)


class OrderCreate(CamelModel):
    customer_name: str = Field(..., min_length=1)
    customer_email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    customer_phone: str = Field(..., min_length=1)
    shipping_address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    postal_code: str | None = None
    special_instructions: str | None = None
    payment_method: PaymentMethodEnum
    items: List[OrderItemCreate] = Field(..., min_length=1)


class OrderStatusUpdate(CamelModel):
    status: OrderStatusEnum


def generate_order_number(now: datetime | None = None) -> str:
    year = (now or datetime.now(timezone.utc)).year
    suffix = "".join(secrets.choice(_ORDER_NUMBER_ALPHABET) for _ in range(6))
    return f"LD-{year}-{suffix}"


async def _load_order(session: AsyncSession, order_id: int) -> Order | None:
    stmt = (
        select(Order)
        .options(selectinload(Order.items).selectinload(OrderItem.product))
        .where(Order.id == order_id)
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


@router.post("/orders", summary="Place an order")
async def create_order(
    payload: OrderCreate,
    session: AsyncSession = Depends(get_session),
    webhooks: WebhookDispatchService = Depends(get_webhook_service),
) -> Dict[str, Any]:
    line_items: List[OrderItem] = []
    for item in payload.items:
        product = await session.get(Product, item.product_id)
        if product is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Product {item.product_id} not found",
            )
        if product.stock < item.quantity:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Insufficient stock for {product.name}",
            )
        product.stock -= item.quantity
        line_items.append(
            OrderItem(product_id=product.id, quantity=item.quantity, price=product.discounted_price)
        )

    totals = compute_order_totals(line_items)
    order = Order(
        order_number=generate_order_number(),
        customer_name=payload.customer_name,
        customer_email=payload.customer_email,
        customer_phone=payload.customer_phone,
        shipping_address=payload.shipping_address,
        city=payload.city,
        postal_code=payload.postal_code or None,
        special_instructions=payload.special_instructions or None,
        payment_method=payload.payment_method,
        total=totals.total,
        status=OrderStatusEnum.PENDING,
        items=line_items,
    )
    session.add(order)
    await session.commit()

    saved = await _load_order(session, order.id)
    if saved is None:  # pragma: no cover - row was committed above
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Order not persisted")
    logger.info("Order created", order_id=saved.id, order_number=saved.order_number, total=str(saved.total))

    try:
        await webhooks.trigger_order_created(saved, saved.items)
    except Exception as exc:
        logger.exception("Order created webhook dispatch failed", order_id=saved.id, error=str(exc))

    return {
        "success": True,
        "order": OrderRecord.model_validate(saved).to_payload(),
        "orderNumber": saved.order_number,
    }


@router.patch(
    "/admin/orders/{order_id}/status",
    summary="Update order status",
    dependencies=[Depends(require_admin_api_key)],
)
async def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    session: AsyncSession = Depends(get_session),
    webhooks: WebhookDispatchService = Depends(get_webhook_service),
) -> Dict[str, Any]:
    order = await session.get(Order, order_id)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")

    old_status = order.status
    order.status = payload.status
    await session.commit()
    await session.refresh(order)
    logger.info(
        "Order status updated",
        order_id=order.id,
        from_status=getattr(old_status, "value", old_status),
        to_status=payload.status.value,
    )

    try:
        await webhooks.trigger_order_status_changed(order, old_status, payload.status)
    except Exception as exc:
        logger.exception("Order status webhook dispatch failed", order_id=order.id, error=str(exc))

    return OrderRecord.model_validate(order).to_payload()
