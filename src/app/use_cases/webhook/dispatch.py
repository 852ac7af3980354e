"""Pipeline de dispatch de webhooks.

Caminho síncrono de uma chamada inbound:
1. Plataforma suportada (InvalidPlatformError)
2. Lookup do registro com timeout (DBTimeoutError | ProxyNotFoundError)
3. Registro ativo (ProxyInactiveError) e da mesma plataforma
   (PlatformMismatchError)
4. Construção do adapter (AdapterCreationError)
5. adapter.handle: verificação, handshake e ack
6. Evento genuíno: agenda o broadcast em background, sem aguardar

A resposta HTTP nunca depende do broadcast.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from app.domain.platforms import is_supported_platform
from app.observability import WebhookOutcomeTimer, get_correlation_id
from app.protocols.adapter import MessageKind
from app.use_cases.webhook._lookup import lookup_with_timeout
from utils.errors import (
    AdapterCreationError,
    GatewayError,
    InvalidPlatformError,
    PlatformMismatchError,
    ProxyInactiveError,
    ProxyNotFoundError,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from app.domain.routing_record import RoutingRecord
    from app.protocols.adapter import PlatformAdapterProtocol
    from app.protocols.routing_store import RoutingStoreProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BroadcastJob:
    """Dados próprios do broadcast; não referencia o objeto de request."""

    routing_key: str
    record_id: str
    platform: str
    raw_body: bytes
    headers: dict[str, str]
    adapter: PlatformAdapterProtocol
    correlation_id: str = ""


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Resultado síncrono devolvido à plataforma remota."""

    kind: MessageKind
    body: dict[str, Any] = field(default_factory=dict)
    broadcast_scheduled: bool = False


class DispatchWebhookUseCase:
    """Orquestra lookup, adapter e agendamento do broadcast.

    Args:
        routing_store: Store de registros de roteamento
        adapter_factory: Constrói o adapter para um registro
        scheduler: Agenda o job de broadcast (fire-and-forget)
        lookup_timeout_seconds: Espera máxima pelo store
    """

    def __init__(
        self,
        *,
        routing_store: RoutingStoreProtocol,
        adapter_factory: Callable[[RoutingRecord], PlatformAdapterProtocol],
        scheduler: Callable[[BroadcastJob], object],
        lookup_timeout_seconds: float = 5.0,
    ) -> None:
        self._routing_store = routing_store
        self._adapter_factory = adapter_factory
        self._scheduler = scheduler
        self._lookup_timeout_seconds = lookup_timeout_seconds

    async def execute(
        self,
        *,
        platform: str,
        routing_key: str,
        raw_body: bytes,
        headers: Mapping[str, str],
    ) -> DispatchResult:
        """Processa uma chamada inbound e devolve o ack.

        Raises:
            GatewayError: Qualquer falha da taxonomia (mapeada para HTTP
                pela rota).
        """
        with WebhookOutcomeTimer(platform, routing_key):
            return await self._dispatch(platform, routing_key, raw_body, headers)

    async def _dispatch(
        self,
        platform: str,
        routing_key: str,
        raw_body: bytes,
        headers: Mapping[str, str],
    ) -> DispatchResult:
        if not is_supported_platform(platform):
            raise InvalidPlatformError(detail=platform)

        record = await lookup_with_timeout(
            self._routing_store, routing_key, self._lookup_timeout_seconds
        )
        if record is None:
            raise ProxyNotFoundError()
        if not record.active:
            raise ProxyInactiveError()
        if record.platform != platform:
            raise PlatformMismatchError(detail=f"{platform}!={record.platform}")

        adapter = self._create_adapter(record)
        outcome = adapter.handle(raw_body, headers)

        scheduled = False
        if outcome.should_broadcast:
            self._scheduler(
                BroadcastJob(
                    routing_key=routing_key,
                    record_id=record.id,
                    platform=platform,
                    raw_body=bytes(raw_body),
                    headers={name.lower(): value for name, value in headers.items()},
                    adapter=adapter,
                    correlation_id=get_correlation_id(),
                )
            )
            scheduled = True

        logger.info(
            "webhook_dispatched",
            extra={
                "platform": platform,
                "routing_key": routing_key,
                "message_kind": outcome.kind.value,
                "broadcast_scheduled": scheduled,
            },
        )
        return DispatchResult(kind=outcome.kind, body=outcome.body, broadcast_scheduled=scheduled)

    def _create_adapter(self, record: RoutingRecord) -> PlatformAdapterProtocol:
        try:
            return self._adapter_factory(record)
        except GatewayError:
            raise
        except Exception as exc:
            logger.error(
                "adapter_creation_failed",
                extra={
                    "platform": record.platform,
                    "routing_key": record.routing_key,
                    "error_type": type(exc).__name__,
                },
            )
            raise AdapterCreationError(detail=type(exc).__name__) from exc
