"""Testes das settings base e do gateway."""

from __future__ import annotations

import pytest

from config.settings import (
    BaseSettings,
    GatewaySettings,
    get_base_settings,
    get_gateway_settings,
)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_base_settings.cache_clear()
    get_gateway_settings.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_gateway_settings.cache_clear()


def test_base_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "prod")
    monkeypatch.setenv("REDIS_URL", "redis://cache:6379/0")
    monkeypatch.setenv("DEBUG", "yes")

    settings = get_base_settings()

    assert settings.environment == "production"
    assert settings.is_production
    assert settings.redis_url == "redis://cache:6379/0"
    assert settings.debug is True


def test_base_settings_unknown_environment_defaults_to_development(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("ENVIRONMENT", "qa")

    assert get_base_settings().is_development


def test_gateway_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GATEWAY_LOOKUP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("GATEWAY_RETRY_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("GATEWAY_ROUTING_STORE", "REDIS")
    monkeypatch.setenv("GATEWAY_HUB_BASE_URL", "https://hub.example.com/")

    settings = get_gateway_settings()

    assert settings.lookup_timeout_seconds == 2.5
    assert settings.retry_max_attempts == 5
    assert settings.routing_store_backend == "redis"
    assert settings.hub_base_url == "https://hub.example.com"
    assert settings.hub_websocket_url == "wss://hub.example.com"


def test_gateway_defaults_are_valid_in_development() -> None:
    assert GatewaySettings().validate(BaseSettings()) == []
    assert GatewaySettings().hub_websocket_url == "ws://localhost:8787"


def test_memory_store_rejected_outside_development() -> None:
    errors = GatewaySettings().validate(BaseSettings(environment="production"))

    assert any("memory" in error for error in errors)


def test_redis_backend_requires_url() -> None:
    errors = GatewaySettings(routing_store_backend="redis").validate(BaseSettings())

    assert errors == ["GATEWAY_ROUTING_STORE=redis requer REDIS_URL configurado"]


def test_invalid_numeric_settings_are_reported() -> None:
    settings = GatewaySettings(
        lookup_timeout_seconds=0,
        retry_max_attempts=0,
        max_background_tasks=0,
        hub_base_url="hub.local",
    )

    assert len(settings.validate(BaseSettings())) == 4


def test_base_settings_requires_service_name() -> None:
    assert BaseSettings(service_name="").validate() == ["SERVICE_NAME não pode ser vazio"]


def test_unknown_backend_is_kept_and_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GATEWAY_ROUTING_STORE", "redsi")

    settings = get_gateway_settings()

    assert settings.routing_store_backend == "redsi"
    assert "GATEWAY_ROUTING_STORE inválido: redsi" in settings.validate(BaseSettings())
