"""Redis Routing Store — registros de roteamento no Redis (Upstash compatível).

Contrato de keys:
- routing:{routing_key}    -> JSON do RoutingRecord
- routing:count:{record_id} -> contador de eventos (INCR, sem transação)

O contador é telemetria consultiva; incrementos concorrentes para a mesma
chave podem se intercalar.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from app.domain.routing_record import RoutingRecord
from app.protocols.routing_store import RoutingStoreProtocol
from utils.errors import InfrastructureError, RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

ROUTING_PREFIX = "routing:"
COUNT_PREFIX = "routing:count:"


class RedisRoutingStore(RoutingStoreProtocol):
    """Store de roteamento usando Redis assíncrono.

    Args:
        redis_client: Cliente redis.asyncio
    """

    def __init__(self, redis_client: AsyncRedis) -> None:
        self._redis = redis_client

    def _key(self, routing_key: str) -> str:
        return f"{ROUTING_PREFIX}{routing_key}"

    def _count_key(self, record_id: str) -> str:
        return f"{COUNT_PREFIX}{record_id}"

    async def lookup(self, routing_key: str) -> RoutingRecord | None:
        try:
            raw = await self._redis.get(self._key(routing_key))
        except Exception as exc:
            raise RedisConnectionError("Falha ao consultar roteamento no Redis") from exc

        if raw is None:
            return None

        try:
            record = RoutingRecord.model_validate_json(raw)
        except ValidationError as exc:
            logger.error(
                "routing_record_invalid",
                extra={"routing_key": routing_key, "error_count": exc.error_count()},
            )
            raise InfrastructureError("Registro de roteamento inválido") from exc

        try:
            count = await self._redis.get(self._count_key(record.id))
        except Exception as exc:
            raise RedisConnectionError("Falha ao consultar contador no Redis") from exc

        if count is None:
            return record
        return record.model_copy(update={"event_count": int(count)})

    async def increment_event_count(self, record_id: str) -> None:
        try:
            await self._redis.incr(self._count_key(record_id))
        except Exception as exc:
            raise RedisConnectionError("Falha ao incrementar contador no Redis") from exc

    async def save(self, record: RoutingRecord) -> None:
        """Grava/atualiza um registro (provisionamento e testes de integração)."""
        try:
            await self._redis.set(self._key(record.routing_key), record.model_dump_json())
        except Exception as exc:
            raise RedisConnectionError("Falha ao gravar roteamento no Redis") from exc

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except Exception:
            logger.warning("routing_store_ping_failed", extra={"backend": "redis"})
            return False

    async def aclose(self) -> None:
        await self._redis.aclose()
