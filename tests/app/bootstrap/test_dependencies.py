"""Testes do wiring do bootstrap."""

from __future__ import annotations

import pytest

from app import bootstrap
from app.bootstrap import dependencies, validate_runtime_settings
from app.infra.stores import MemoryRoutingStore, RedisRoutingStore
from app.use_cases.webhook import DispatchWebhookUseCase, OpenConnectionUseCase
from config.settings import get_base_settings, get_gateway_settings
from tests.fakes.routing import FakeBroadcastTarget, FakeRoutingStore


@pytest.fixture(autouse=True)
def _clear_caches():
    get_base_settings.cache_clear()
    get_gateway_settings.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_gateway_settings.cache_clear()


def test_memory_store_is_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GATEWAY_ROUTING_STORE", raising=False)

    assert isinstance(dependencies.create_routing_store(), MemoryRoutingStore)


def test_memory_store_outside_development_is_logged(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setenv("ENVIRONMENT", "staging")
    monkeypatch.setenv("GATEWAY_ROUTING_STORE", "memory")

    with caplog.at_level("WARNING"):
        dependencies.create_routing_store()

    assert any(r.getMessage() == "memory_store_in_non_dev" for r in caplog.records)


def test_unknown_backend_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GATEWAY_ROUTING_STORE", "redsi")

    with pytest.raises(ValueError, match="redsi"):
        dependencies.create_routing_store()


def test_redis_store_uses_shared_client(monkeypatch: pytest.MonkeyPatch) -> None:
    sentinel = object()
    monkeypatch.setenv("GATEWAY_ROUTING_STORE", "redis")
    monkeypatch.setattr(dependencies, "create_async_redis_client", lambda: sentinel)

    store = dependencies.create_routing_store()

    assert isinstance(store, RedisRoutingStore)


def test_dispatch_use_case_wiring(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GATEWAY_LOOKUP_TIMEOUT_SECONDS", "1.5")

    use_case = dependencies.create_dispatch_use_case(
        routing_store=FakeRoutingStore(), broadcast_target=FakeBroadcastTarget()
    )

    assert isinstance(use_case, DispatchWebhookUseCase)
    assert use_case._lookup_timeout_seconds == 1.5


def test_connection_use_case_wiring() -> None:
    use_case = dependencies.create_connection_use_case(routing_store=FakeRoutingStore())

    assert isinstance(use_case, OpenConnectionUseCase)


def test_broadcast_scheduler_forwards_correlation_id(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []

    def _fake_schedule(*, correlation_id: str, coroutine: object) -> int:
        calls.append({"correlation_id": correlation_id, "coroutine": coroutine})
        coroutine.close()
        return 1

    class _Broadcaster:
        async def run(self, job: object) -> None:
            return None

    job = type("Job", (), {"correlation_id": "corr-9"})()
    monkeypatch.setattr(dependencies, "schedule_background_task", _fake_schedule)

    dependencies.create_broadcast_scheduler(_Broadcaster())(job)

    assert calls[0]["correlation_id"] == "corr-9"


def test_validation_is_lenient_in_development(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("GATEWAY_ROUTING_STORE", "redis")
    monkeypatch.delenv("REDIS_URL", raising=False)

    validate_runtime_settings()


def test_validation_is_strict_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("GATEWAY_ROUTING_STORE", "memory")

    with pytest.raises(RuntimeError, match="production"):
        validate_runtime_settings()


def test_routing_store_singleton(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GATEWAY_ROUTING_STORE", raising=False)
    bootstrap.get_routing_store.cache_clear()
    try:
        assert bootstrap.get_routing_store() is bootstrap.get_routing_store()
    finally:
        bootstrap.get_routing_store.cache_clear()
