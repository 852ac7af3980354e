"""Validação de pedidos de conexão ao vivo (ws | sse).

Apenas valida e resolve o registro; o encaminhamento ao hub fica na rota.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.platforms import CONNECTION_TYPES, is_supported_platform
from app.use_cases.webhook._lookup import lookup_with_timeout
from utils.errors import (
    InvalidConnectionTypeError,
    InvalidPlatformError,
    PlatformMismatchError,
    ProxyNotFoundError,
)

if TYPE_CHECKING:
    from app.domain.routing_record import RoutingRecord
    from app.protocols.routing_store import RoutingStoreProtocol

logger = logging.getLogger(__name__)


class OpenConnectionUseCase:
    """Resolve o registro para uma conexão de assinante."""

    def __init__(
        self,
        *,
        routing_store: RoutingStoreProtocol,
        lookup_timeout_seconds: float = 5.0,
    ) -> None:
        self._routing_store = routing_store
        self._lookup_timeout_seconds = lookup_timeout_seconds

    async def execute(
        self,
        *,
        platform: str,
        routing_key: str,
        connection_type: str,
    ) -> RoutingRecord:
        """Valida o pedido e retorna o registro ativo.

        Raises:
            InvalidPlatformError, InvalidConnectionTypeError,
            ProxyNotFoundError, PlatformMismatchError, DBTimeoutError
        """
        if not is_supported_platform(platform):
            raise InvalidPlatformError(detail=platform)
        if connection_type not in CONNECTION_TYPES:
            raise InvalidConnectionTypeError(detail=connection_type)

        record = await lookup_with_timeout(
            self._routing_store, routing_key, self._lookup_timeout_seconds
        )
        if record is None or not record.active:
            raise ProxyNotFoundError("Proxy not found or inactive")
        if record.platform != platform:
            raise PlatformMismatchError(detail=f"{platform}!={record.platform}")

        logger.info(
            "connection_requested",
            extra={
                "platform": platform,
                "routing_key": routing_key,
                "connection_type": connection_type,
            },
        )
        return record
