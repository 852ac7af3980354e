"""Factories de clientes externos — Redis e HTTP do hub."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

import httpx

from config.settings import get_base_settings, get_gateway_settings

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Redis Client Factory
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def create_async_redis_client() -> AsyncRedis:
    """Cria cliente Redis assíncrono (singleton).

    Raises:
        ValueError: Se REDIS_URL não configurado
    """
    from redis.asyncio import Redis as AsyncRedis

    redis_url = get_base_settings().redis_url
    if not redis_url:
        msg = "REDIS_URL não configurado"
        raise ValueError(msg)

    client: AsyncRedis = AsyncRedis.from_url(
        redis_url,
        decode_responses=False,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
    )

    logger.info("async_redis_client_created")
    return client


# ──────────────────────────────────────────────────────────────────────────────
# Hub HTTP Client Factory
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def create_hub_http_client() -> httpx.AsyncClient:
    """Cria cliente HTTP assíncrono para o hub (singleton)."""
    settings = get_gateway_settings()
    client = httpx.AsyncClient(
        timeout=settings.hub_timeout_seconds,
        limits=httpx.Limits(max_connections=settings.max_background_tasks),
    )
    logger.info("hub_http_client_created", extra={"hub_base_url": settings.hub_base_url})
    return client
