"""Read access to webhook subscriptions for the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Protocol, Sequence, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from souq_api.models.webhook import Webhook


@dataclass(frozen=True, slots=True)
class WebhookSubscription:
    """Immutable snapshot of a registered webhook."""

    id: int
    name: str
    url: str
    events: Tuple[str, ...] = field(default_factory=tuple)
    is_active: bool = True
    secret: str | None = None

    @classmethod
    def from_model(cls, webhook: Webhook) -> "WebhookSubscription":
        return cls(
            id=webhook.id,
            name=webhook.name,
            url=webhook.url,
            events=tuple(webhook.events or ()),
            is_active=bool(webhook.is_active),
            secret=webhook.secret or None,
        )

    def accepts(self, event: str) -> bool:
        return self.is_active and event in self.events


class WebhookRepository(Protocol):
    async def list_active_for_event(self, event: str) -> Sequence[WebhookSubscription]: ...


class SqlAlchemyWebhookRepository:
    """Loads subscriptions through a short-lived session per lookup."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def list_active_for_event(self, event: str) -> List[WebhookSubscription]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(Webhook).where(Webhook.is_active.is_(True)).order_by(Webhook.id)
            )
            webhooks = result.scalars().all()
        # events is a JSON list, so membership is checked here to stay portable across backends
        subscriptions = (WebhookSubscription.from_model(webhook) for webhook in webhooks)
        return [subscription for subscription in subscriptions if subscription.accepts(event)]


class InMemoryWebhookRepository:
    """Fixed list of subscriptions, used by tests and local tooling."""

    def __init__(self, subscriptions: Iterable[WebhookSubscription] = ()) -> None:
        self.subscriptions: List[WebhookSubscription] = list(subscriptions)

    async def list_active_for_event(self, event: str) -> List[WebhookSubscription]:
        return [subscription for subscription in self.subscriptions if subscription.accepts(event)]


__all__ = [
    "InMemoryWebhookRepository",
    "SqlAlchemyWebhookRepository",
    "WebhookRepository",
    "WebhookSubscription",
]
