"""Outbound webhook delivery for order events."""

from .dispatcher import (  # noqa: F401
    ORDER_CREATED_EVENT,
    ORDER_STATUS_CHANGED_EVENT,
    WEBHOOK_TEST_EVENT,
    OrderTotals,
    WebhookDeliveryResult,
    WebhookDispatchService,
    compute_order_totals,
)
from .repository import (  # noqa: F401
    InMemoryWebhookRepository,
    SqlAlchemyWebhookRepository,
    WebhookRepository,
    WebhookSubscription,
)
from .signing import serialize_payload, sign_payload  # noqa: F401
