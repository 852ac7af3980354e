"""Broadcast em background de um evento aceito.

Dois efeitos independentes, cada um com retry próprio:
- incremento do contador de eventos do registro (telemetria consultiva)
- envio do CanonicalEvent ao hub

Falhas após esgotar as tentativas são logadas e nunca propagadas: a
plataforma remota já recebeu o ack.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from app.services.retry import RetryPolicy, retry_always, retry_transient, with_retry
from utils.errors import BroadcastFailureError

if TYPE_CHECKING:
    from app.domain.canonical_event import CanonicalEvent
    from app.protocols.broadcast_target import BroadcastTargetProtocol
    from app.protocols.routing_store import RoutingStoreProtocol
    from app.use_cases.webhook.dispatch import BroadcastJob

logger = logging.getLogger(__name__)


class BroadcastEventUseCase:
    """Executa o job de broadcast.

    Args:
        routing_store: Store para o contador de eventos
        broadcast_target: Hub de conexões
        max_attempts: Tentativas por efeito
        initial_delay: Atraso (s) antes da segunda tentativa
    """

    def __init__(
        self,
        *,
        routing_store: RoutingStoreProtocol,
        broadcast_target: BroadcastTargetProtocol,
        max_attempts: int = 3,
        initial_delay: float = 0.1,
    ) -> None:
        self._routing_store = routing_store
        self._broadcast_target = broadcast_target
        self._count_policy = RetryPolicy(
            max_attempts=max_attempts,
            initial_delay=initial_delay,
            should_continue=retry_always,
        )
        self._send_policy = RetryPolicy(
            max_attempts=max_attempts,
            initial_delay=initial_delay,
            should_continue=retry_transient,
        )

    async def run(self, job: BroadcastJob) -> None:
        """Transforma o corpo próprio do job e aplica os efeitos."""
        event = job.adapter.transform(json.loads(job.raw_body), job.headers)
        await self._increment_count(job)
        await self._send(job, event)

    async def _increment_count(self, job: BroadcastJob) -> None:
        try:
            await with_retry(
                lambda: self._routing_store.increment_event_count(job.record_id),
                self._count_policy,
                operation_name="increment_event_count",
            )
        except Exception as exc:
            logger.error(
                "event_count_update_failed",
                extra={
                    "routing_key": job.routing_key,
                    "record_id": job.record_id,
                    "error_type": type(exc).__name__,
                },
            )

    async def _send(self, job: BroadcastJob, event: CanonicalEvent) -> None:
        try:
            await with_retry(
                lambda: self._broadcast_target.send(job.routing_key, event),
                self._send_policy,
                operation_name="broadcast_send",
            )
        except Exception as exc:
            logger.error(
                "broadcast_failed",
                extra={
                    "platform": job.platform,
                    "routing_key": job.routing_key,
                    "event_id": event.id,
                    "error_kind": BroadcastFailureError.kind,
                    "error_type": type(exc).__name__,
                },
            )
            return

        logger.info(
            "event_broadcasted",
            extra={
                "platform": job.platform,
                "routing_key": job.routing_key,
                "event_id": event.id,
                "event_type": event.type,
            },
        )
