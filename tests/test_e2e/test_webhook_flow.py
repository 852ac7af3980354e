"""Teste E2E: webhook assinado entra pela app ASGI e chega ao hub."""

from __future__ import annotations

import httpx
import pytest

from api.connectors.signatures.hmac_sha256 import compute_hmac_hex
from api.routes.webhook import runtime
from api.routes.webhook.runtime_tasks import drain_background_tasks
from app.app import create_app
from app.bootstrap.dependencies import create_dispatch_use_case
from app.infra.stores import MemoryRoutingStore
from tests.fakes.routing import FakeBroadcastTarget, make_record

SECRET = "s3cret"
BODY = b'{"action":"opened","issue":{"number":7}}'


@pytest.fixture
def hub() -> FakeBroadcastTarget:
    return FakeBroadcastTarget()


@pytest.fixture
def store() -> MemoryRoutingStore:
    return MemoryRoutingStore([make_record(credential=SECRET)])


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch, store: MemoryRoutingStore, hub: FakeBroadcastTarget):
    use_case = create_dispatch_use_case(routing_store=store, broadcast_target=hub)
    monkeypatch.setattr(runtime, "_dispatch_use_case", use_case)
    transport = httpx.ASGITransport(app=create_app())
    return httpx.AsyncClient(transport=transport, base_url="http://testserver")


@pytest.mark.asyncio
async def test_signed_event_is_acknowledged_and_broadcast(
    client: httpx.AsyncClient,
    store: MemoryRoutingStore,
    hub: FakeBroadcastTarget,
) -> None:
    headers = {
        "X-Hub-Signature-256": "sha256=" + compute_hmac_hex(SECRET, BODY),
        "X-GitHub-Event": "issues",
        "X-GitHub-Delivery": "delivery-1",
        "X-Correlation-Id": "corr-e2e",
    }

    async with client:
        response = await client.post("/github/k1", content=BODY, headers=headers)
    await drain_background_tasks(timeout_seconds=5.0)

    assert response.status_code == 200
    assert response.json() == {"status": "received"}
    assert len(hub.sent) == 1
    (routing_key, event) = hub.sent[0]
    assert routing_key == "k1"
    assert event.platform == "github"
    assert event.type == "issues.opened"
    assert store.event_count("rec-1") == 1


@pytest.mark.asyncio
async def test_unknown_routing_key_is_not_found(
    client: httpx.AsyncClient, hub: FakeBroadcastTarget
) -> None:
    async with client:
        response = await client.post("/github/missing", content=BODY)

    assert response.status_code == 404
    assert response.text == "Proxy not found"
    assert hub.sent == []


@pytest.mark.asyncio
async def test_health_endpoint(client: httpx.AsyncClient) -> None:
    async with client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
