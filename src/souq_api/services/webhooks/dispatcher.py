"""Signed delivery of order events to registered webhook subscribers.

Deliveries are sequential and best effort: a failing subscriber is logged and
skipped, and no error ever propagates to the code that triggered the event.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping

import httpx
from loguru import logger

from souq_api.core.settings import settings
from souq_api.models.order import Order, OrderItem
from souq_api.schemas.orders import OrderItemRecord, OrderRecord

from .repository import WebhookRepository, WebhookSubscription
from .signing import SIGNATURE_HEADER, serialize_payload, signature_header_value

ORDER_CREATED_EVENT = "order.created"
ORDER_STATUS_CHANGED_EVENT = "order.status_changed"
WEBHOOK_TEST_EVENT = "webhook.test"

FREE_SHIPPING_THRESHOLD = Decimal("1000")
FLAT_SHIPPING_FEE = Decimal("25")


@dataclass(frozen=True, slots=True)
class OrderTotals:
    subtotal: Decimal
    shipping: Decimal
    total: Decimal

    def as_payload(self) -> Dict[str, float]:
        return {
            "subtotal": float(self.subtotal),
            "shipping": float(self.shipping),
            "total": float(self.total),
        }


@dataclass(frozen=True, slots=True)
class WebhookDeliveryResult:
    webhook_id: int
    url: str
    delivered: bool
    status_code: int | None = None
    error: str | None = None


def compute_order_totals(items: Iterable[Any]) -> OrderTotals:
    """Sum line items and apply the flat shipping fee below the free-shipping threshold."""

    subtotal = sum(
        (Decimal(str(item.price)) * int(item.quantity) for item in items),
        Decimal("0"),
    )
    shipping = Decimal("0") if subtotal >= FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_FEE
    return OrderTotals(subtotal=subtotal, shipping=shipping, total=subtotal + shipping)


def utc_timestamp(moment: datetime | None = None) -> str:
    current = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return current.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _status_value(status: Any) -> str:
    return getattr(status, "value", status)


class WebhookDispatchService:
    """Builds order event payloads and posts them to every matching subscriber."""

    def __init__(
        self,
        repository: WebhookRepository,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float | None = None,
        user_agent: str | None = None,
    ) -> None:
        self._repository = repository
        self._http_client = http_client
        self._timeout = timeout_seconds if timeout_seconds is not None else settings.webhook_timeout_seconds
        self._user_agent = user_agent or settings.webhook_user_agent

    async def trigger(self, event: str, payload: Mapping[str, Any]) -> List[WebhookDeliveryResult]:
        try:
            subscriptions = await self._repository.list_active_for_event(event)
        except Exception as exc:
            logger.exception("Failed to load webhook subscriptions", webhook_event=event, error=str(exc))
            return []

        if not subscriptions:
            logger.debug("No webhook subscribers for event", webhook_event=event)
            return []

        body = serialize_payload(payload)
        results: List[WebhookDeliveryResult] = []
        close_client = False
        client = self._http_client
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout)
            close_client = True
        try:
            for subscription in subscriptions:
                results.append(await self._post(client, subscription, body, event=event))
        finally:
            if close_client:
                await client.aclose()
        return results

    async def deliver(
        self,
        subscription: WebhookSubscription,
        payload: Mapping[str, Any],
    ) -> WebhookDeliveryResult:
        body = serialize_payload(payload)
        event = str(payload.get("event", ""))
        if self._http_client is not None:
            return await self._post(self._http_client, subscription, body, event=event)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await self._post(client, subscription, body, event=event)

    def _headers(self, subscription: WebhookSubscription, body: bytes) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self._user_agent,
        }
        if subscription.secret:
            headers[SIGNATURE_HEADER] = signature_header_value(body, subscription.secret)
        return headers

    async def _post(
        self,
        client: httpx.AsyncClient,
        subscription: WebhookSubscription,
        body: bytes,
        *,
        event: str,
    ) -> WebhookDeliveryResult:
        try:
            response = await client.post(
                subscription.url,
                content=body,
                headers=self._headers(subscription, body),
                timeout=self._timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error(
                "Webhook delivery failed",
                webhook_id=subscription.id,
                url=subscription.url,
                webhook_event=event,
                error=str(exc),
            )
            return WebhookDeliveryResult(
                webhook_id=subscription.id,
                url=subscription.url,
                delivered=False,
                error=str(exc) or exc.__class__.__name__,
            )

        if response.is_success:
            logger.info(
                "Webhook delivered",
                webhook_id=subscription.id,
                url=subscription.url,
                webhook_event=event,
                status_code=response.status_code,
            )
            return WebhookDeliveryResult(
                webhook_id=subscription.id,
                url=subscription.url,
                delivered=True,
                status_code=response.status_code,
            )

        logger.error(
            "Webhook rejected by subscriber",
            webhook_id=subscription.id,
            url=subscription.url,
            webhook_event=event,
            status_code=response.status_code,
            reason=response.reason_phrase,
        )
        return WebhookDeliveryResult(
            webhook_id=subscription.id,
            url=subscription.url,
            delivered=False,
            status_code=response.status_code,
            error=f"{response.status_code} {response.reason_phrase}".strip(),
        )

    def build_order_created_payload(self, order: Order, items: Iterable[OrderItem]) -> Dict[str, Any]:
        item_list = list(items)
        order_record = OrderRecord.model_validate(order)
        totals = compute_order_totals(item_list)
        return {
            "event": ORDER_CREATED_EVENT,
            "timestamp": utc_timestamp(),
            "data": {
                "order": order_record.to_payload(),
                "items": [OrderItemRecord.model_validate(item).to_payload() for item in item_list],
                "customer": {
                    "name": order_record.customer_name,
                    "email": order_record.customer_email,
                    "phone": order_record.customer_phone,
                    "shippingAddress": order_record.shipping_address,
                },
                "totals": totals.as_payload(),
                "metadata": {
                    "orderNumber": order_record.order_number,
                    "paymentMethod": _status_value(order_record.payment_method),
                    "status": _status_value(order_record.status),
                },
            },
        }

    def build_order_status_changed_payload(
        self,
        order: Order,
        old_status: Any,
        new_status: Any,
    ) -> Dict[str, Any]:
        order_record = OrderRecord.model_validate(order)
        return {
            "event": ORDER_STATUS_CHANGED_EVENT,
            "timestamp": utc_timestamp(),
            "data": {
                "order": order_record.to_payload(),
                "statusChange": {
                    "from": _status_value(old_status),
                    "to": _status_value(new_status),
                },
                "metadata": {"orderNumber": order_record.order_number},
            },
        }

    async def trigger_order_created(
        self,
        order: Order,
        items: Iterable[OrderItem],
    ) -> List[WebhookDeliveryResult]:
        payload = self.build_order_created_payload(order, items)
        return await self.trigger(ORDER_CREATED_EVENT, payload)

    async def trigger_order_status_changed(
        self,
        order: Order,
        old_status: Any,
        new_status: Any,
    ) -> List[WebhookDeliveryResult]:
        payload = self.build_order_status_changed_payload(order, old_status, new_status)
        return await self.trigger(ORDER_STATUS_CHANGED_EVENT, payload)

    async def send_test_event(self, subscription: WebhookSubscription) -> WebhookDeliveryResult:
        payload = {
            "event": WEBHOOK_TEST_EVENT,
            "timestamp": utc_timestamp(),
            "data": {
                "message": "This is a test webhook from ThriftySouq",
                "webhook_id": subscription.id,
                "webhook_name": subscription.name,
            },
        }
        return await self.deliver(subscription, payload)


__all__ = [
    "ORDER_CREATED_EVENT",
    "ORDER_STATUS_CHANGED_EVENT",
    "OrderTotals",
    "WEBHOOK_TEST_EVENT",
    "WebhookDeliveryResult",
    "WebhookDispatchService",
    "compute_order_totals",
    "utc_timestamp",
]
