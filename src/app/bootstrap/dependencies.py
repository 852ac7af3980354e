"""Factories — criação de implementações concretas e wiring dos use cases.

Este módulo centraliza a criação de stores, alvo de broadcast e use cases
baseados nas configurações de ambiente.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

from api.connectors.registry import create_adapter
from api.routes.webhook.runtime_tasks import schedule_background_task
from app.bootstrap.clients import create_async_redis_client, create_hub_http_client
from app.infra.broadcast import HubBroadcastTarget
from app.infra.stores import MemoryRoutingStore, RedisRoutingStore
from app.use_cases.webhook import (
    BroadcastEventUseCase,
    DispatchWebhookUseCase,
    OpenConnectionUseCase,
)
from config.settings import get_base_settings, get_gateway_settings

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.broadcast_target import BroadcastTargetProtocol
    from app.protocols.routing_store import RoutingStoreProtocol
    from app.use_cases.webhook import BroadcastJob

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Routing Store Factory
# ──────────────────────────────────────────────────────────────────────────────


def create_routing_store() -> RoutingStoreProtocol:
    """Cria store de roteamento baseado na configuração.

    GATEWAY_ROUTING_STORE:
    - "memory": MemoryRoutingStore (dev only)
    - "redis": RedisRoutingStore (staging/production)
    """
    backend = get_gateway_settings().routing_store_backend

    if backend == "redis":
        store: RoutingStoreProtocol = RedisRoutingStore(create_async_redis_client())
        logger.info("routing_store_created", extra={"backend": "redis"})
        return store

    if backend == "memory":
        environment = get_base_settings().environment
        if environment != "development":
            logger.warning(
                "memory_store_in_non_dev",
                extra={"backend": "memory", "environment": environment},
            )
        logger.info("routing_store_created", extra={"backend": "memory"})
        return MemoryRoutingStore()

    msg = f"GATEWAY_ROUTING_STORE inválido: {backend}"
    raise ValueError(msg)


# ──────────────────────────────────────────────────────────────────────────────
# Broadcast Target Factory
# ──────────────────────────────────────────────────────────────────────────────


def create_broadcast_target() -> HubBroadcastTarget:
    settings = get_gateway_settings()
    return HubBroadcastTarget(
        settings.hub_base_url,
        settings.hub_websocket_url,
        client=create_hub_http_client(),
        timeout_seconds=settings.hub_timeout_seconds,
    )


# ──────────────────────────────────────────────────────────────────────────────
# Use Case Factories
# ──────────────────────────────────────────────────────────────────────────────


def create_broadcast_scheduler(
    broadcaster: BroadcastEventUseCase,
) -> Callable[[BroadcastJob], object]:
    """Agenda `broadcaster.run(job)` como task desacoplada do request."""

    def schedule(job: BroadcastJob) -> object:
        return schedule_background_task(
            correlation_id=job.correlation_id,
            coroutine=broadcaster.run(job),
        )

    return schedule


def create_dispatch_use_case(
    *,
    routing_store: RoutingStoreProtocol | None = None,
    broadcast_target: BroadcastTargetProtocol | None = None,
) -> DispatchWebhookUseCase:
    """Monta o pipeline de dispatch com as dependências configuradas."""
    from app.bootstrap import get_broadcast_target, get_routing_store

    settings = get_gateway_settings()
    store = routing_store or get_routing_store()
    broadcaster = BroadcastEventUseCase(
        routing_store=store,
        broadcast_target=broadcast_target or get_broadcast_target(),
        max_attempts=settings.retry_max_attempts,
        initial_delay=settings.retry_initial_delay_seconds,
    )
    return DispatchWebhookUseCase(
        routing_store=store,
        adapter_factory=partial(create_adapter, settings=settings),
        scheduler=create_broadcast_scheduler(broadcaster),
        lookup_timeout_seconds=settings.lookup_timeout_seconds,
    )


def create_connection_use_case(
    *,
    routing_store: RoutingStoreProtocol | None = None,
) -> OpenConnectionUseCase:
    from app.bootstrap import get_routing_store

    return OpenConnectionUseCase(
        routing_store=routing_store or get_routing_store(),
        lookup_timeout_seconds=get_gateway_settings().lookup_timeout_seconds,
    )
