import asyncio
import json
import os
import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine


def _configure_path() -> None:
    src_path = Path(__file__).resolve().parents[1] / "src"
    if src_path.exists():
        sys.path.insert(0, str(src_path))


_configure_path()
os.environ["TRACING_ENABLED"] = "false"
os.environ["ADMIN_API_KEY"] = ""

from souq_api.app import create_app  # noqa: E402
from souq_api.db.base import Base  # noqa: E402
from souq_api.db.session import get_session  # noqa: E402
from souq_api.domain.ai.provider_registry import ProviderKind, ProviderRegistry  # noqa: E402
from souq_api.services.ai.base import ConversationalProvider  # noqa: E402
from souq_api.services.marketing.prompts import (  # noqa: E402
    ANALYSIS_SYSTEM_PROMPT,
    BANNER_SYSTEM_PROMPT,
    DESCRIPTION_SYSTEM_PROMPT,
    OPTIMIZATION_SYSTEM_PROMPT,
)
from souq_api.services.webhooks import SqlAlchemyWebhookRepository, WebhookDispatchService  # noqa: E402
import souq_api.models  # noqa: E402,F401

ANALYSIS_RESPONSE = {
    "luxuryScore": 88,
    "discountAppeal": 91,
    "targetAudience": "Young professionals",
    "sellingPoints": ["Authentic", "Discounted", "Curated"],
    "competitiveAdvantages": ["Price", "Speed", "Trust"],
    "emotionalHooks": ["Status", "Reward", "Exclusivity"],
}

BANNER_RESPONSE = {
    "badgeText": "Flash Sale",
    "mainTitle": "LUXURY",
    "highlightTitle": "UNLEASHED",
    "subtitle": "Designer Deals",
    "description": "Authentic luxury at up to 70% off.",
    "buttonText": "Shop Now",
    "footerText": "Free worldwide shipping",
    "urgencyTactics": ["Limited stock"],
    "emotionalTriggers": ["Status"],
    "salesTechniques": ["Scarcity"],
}

DESCRIPTION_RESPONSE = {
    "shortDescription": "A timeless icon.",
    "longDescription": "Crafted for those who notice. Now at a price that makes sense.",
    "sellingPoints": ["Swiss made", "Sapphire crystal", "Two-year warranty", "Authenticated"],
    "urgencyText": "Only 3 left",
}


class ScriptedProvider(ConversationalProvider):
    """Conversational provider answering from canned JSON keyed by system prompt."""

    def __init__(self, kind: ProviderKind, *, overrides=None, error=None, delay=0.0):
        self.kind = kind
        self.display_name = f"Scripted {kind.value}"
        self.responses = {
            ANALYSIS_SYSTEM_PROMPT: ANALYSIS_RESPONSE,
            BANNER_SYSTEM_PROMPT: {**BANNER_RESPONSE, "badgeText": f"{kind.value} pick"},
            DESCRIPTION_SYSTEM_PROMPT: DESCRIPTION_RESPONSE,
            OPTIMIZATION_SYSTEM_PROMPT: {**BANNER_RESPONSE, "badgeText": "Best of both"},
        }
        self.responses.update(overrides or {})
        self.error = error
        self.delay = delay
        self.calls = []
        self.cancelled = False

    def calls_for(self, system_prompt):
        return [prompt for prompt, system in self.calls if system == system_prompt]

    async def _complete_json(self, prompt, system_prompt, *, temperature, max_tokens):
        self.calls.append((prompt, system_prompt))
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error is not None:
            raise self.error
        response = self.responses[system_prompt]
        return response if isinstance(response, str) else json.dumps(response)


@pytest.fixture
def scripted_provider():
    return ScriptedProvider


@pytest.fixture
def provider_registry():
    registry = ProviderRegistry()
    registry.register_conversational_provider(ScriptedProvider(ProviderKind.OPENAI))
    registry.register_conversational_provider(ScriptedProvider(ProviderKind.GEMINI))
    return registry


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    try:
        yield factory
    finally:
        await engine.dispose()


@pytest.fixture
def webhook_requests():
    return []


@pytest_asyncio.fixture
async def app_with_db(session_factory, provider_registry, webhook_requests):
    app = create_app()

    async def override_get_session():
        async with session_factory() as session:
            yield session

    def webhook_handler(request: httpx.Request) -> httpx.Response:
        webhook_requests.append(request)
        return httpx.Response(200, json={"ok": True})

    webhook_client = httpx.AsyncClient(transport=httpx.MockTransport(webhook_handler))
    app.dependency_overrides[get_session] = override_get_session
    app.state.provider_registry = provider_registry
    app.state.webhook_service = WebhookDispatchService(
        SqlAlchemyWebhookRepository(session_factory),
        http_client=webhook_client,
    )

    try:
        yield app, session_factory
    finally:
        app.dependency_overrides.clear()
        await webhook_client.aclose()


def api_client(app) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


@pytest.fixture
def client_for():
    return api_client
