"""Lookup de roteamento com timeout, compartilhado entre dispatch e conexões."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from app.observability import record_latency
from utils.errors import DBTimeoutError

if TYPE_CHECKING:
    from app.domain.routing_record import RoutingRecord
    from app.protocols.routing_store import RoutingStoreProtocol

logger = logging.getLogger(__name__)


async def lookup_with_timeout(
    store: RoutingStoreProtocol,
    routing_key: str,
    timeout_seconds: float,
) -> RoutingRecord | None:
    """Busca o registro limitando a espera.

    Timeout e "não encontrado" são resultados distintos: o primeiro levanta
    DBTimeoutError, o segundo retorna None.

    Raises:
        DBTimeoutError: O store não respondeu dentro de `timeout_seconds`.
    """
    started_at = time.perf_counter()
    try:
        record = await asyncio.wait_for(store.lookup(routing_key), timeout=timeout_seconds)
    except TimeoutError as exc:
        logger.error(
            "routing_lookup_timeout",
            extra={"routing_key": routing_key, "timeout_seconds": timeout_seconds},
        )
        raise DBTimeoutError(detail="routing_lookup_timeout") from exc

    record_latency("routing_store", "lookup", (time.perf_counter() - started_at) * 1000)
    return record
