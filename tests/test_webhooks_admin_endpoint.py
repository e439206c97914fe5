from __future__ import annotations

import json

import httpx
import pytest

from souq_api.models.webhook import Webhook
from souq_api.services.webhooks import SqlAlchemyWebhookRepository, WebhookDispatchService


@pytest.mark.asyncio
async def test_webhook_crud(app_with_db, client_for):
    app, session_factory = app_with_db

    async with client_for(app) as client:
        created = await client.post(
            "/api/admin/webhooks",
            json={
                "name": "Zapier",
                "url": "https://hooks.zapier.com/abc",
                "events": ["order.created", "order.created"],
                "secret": "s3cret",
            },
        )
        webhook_id = created.json()["id"]
        listed = await client.get("/api/admin/webhooks")
        updated = await client.put(
            f"/api/admin/webhooks/{webhook_id}",
            json={"name": "Zapier", "url": "https://hooks.zapier.com/abc", "events": [], "isActive": False},
        )
        deleted = await client.delete(f"/api/admin/webhooks/{webhook_id}")
        missing = await client.delete(f"/api/admin/webhooks/{webhook_id}")

    assert created.status_code == 201
    assert created.json()["events"] == ["order.created"]
    assert created.json()["isActive"] is True
    assert [webhook["name"] for webhook in listed.json()] == ["Zapier"]
    assert updated.json()["isActive"] is False
    assert updated.json()["secret"] is None
    assert deleted.json() == {"message": "Webhook deleted successfully"}
    assert missing.status_code == 404

    async with session_factory() as session:
        assert await session.get(Webhook, webhook_id) is None


@pytest.mark.asyncio
async def test_webhook_validation(app_with_db, client_for):
    app, _ = app_with_db

    async with client_for(app) as client:
        bad_url = await client.post("/api/admin/webhooks", json={"name": "x", "url": "ftp://example.com"})
        bad_port = await client.post(
            "/api/admin/webhooks",
            json={"name": "x", "url": "http://hook.example.com:notaport/h"},
        )
        no_host = await client.post("/api/admin/webhooks", json={"name": "x", "url": "https:///hook"})
        bad_event = await client.post(
            "/api/admin/webhooks",
            json={"name": "x", "url": "https://example.com", "events": ["order.deleted"]},
        )

    assert bad_url.status_code == 422
    assert bad_port.status_code == 422
    assert no_host.status_code == 422
    assert bad_event.status_code == 422


@pytest.mark.asyncio
async def test_send_test_webhook(app_with_db, client_for, webhook_requests):
    app, session_factory = app_with_db
    async with session_factory() as session:
        webhook = Webhook(name="QA", url="https://qa.example.com/hook", events=["order.created"], secret="k")
        session.add(webhook)
        await session.commit()
        await session.refresh(webhook)

    async with client_for(app) as client:
        response = await client.post(f"/api/admin/webhooks/{webhook.id}/test")
        missing = await client.post("/api/admin/webhooks/9999/test")

    assert response.status_code == 200
    assert response.json() == {"message": "Test webhook sent successfully", "status": 200}
    assert missing.status_code == 404
    payload = json.loads(webhook_requests[0].content)
    assert payload["event"] == "webhook.test"
    assert payload["data"]["webhook_name"] == "QA"
    assert webhook_requests[0].headers["x-webhook-signature"].startswith("sha256=")


@pytest.mark.asyncio
async def test_send_test_webhook_reports_subscriber_error(app_with_db, client_for):
    app, session_factory = app_with_db
    async with session_factory() as session:
        webhook = Webhook(name="Broken", url="https://broken.example.com/hook", events=["order.created"])
        session.add(webhook)
        await session.commit()
        await session.refresh(webhook)

    async with httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(503))) as http:
        app.state.webhook_service = WebhookDispatchService(SqlAlchemyWebhookRepository(session_factory), http_client=http)
        async with client_for(app) as client:
            response = await client.post(f"/api/admin/webhooks/{webhook.id}/test")

    assert response.status_code == 502
    assert response.json()["detail"]["status"] == 503


@pytest.mark.asyncio
async def test_send_test_webhook_reports_malformed_stored_url(app_with_db, client_for, webhook_requests):
    app, session_factory = app_with_db
    async with session_factory() as session:
        webhook = Webhook(name="Legacy", url="http://hook.example.com:notaport/h", events=["order.created"])
        session.add(webhook)
        await session.commit()
        await session.refresh(webhook)

    async with client_for(app) as client:
        response = await client.post(f"/api/admin/webhooks/{webhook.id}/test")

    assert response.status_code == 502
    assert response.json()["detail"]["status"] is None
    assert response.json()["detail"]["error"]
    assert webhook_requests == []
