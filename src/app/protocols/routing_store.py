"""Protocolo do store de registros de roteamento.

Interface leve (ABC) dependida pela Application. Implementações concretas
ficam em app/infra/stores/.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.routing_record import RoutingRecord


class RoutingStoreProtocol(ABC):
    """Contrato do store de roteamento.

    Métodos canônicos:
    - lookup(routing_key) -> RoutingRecord | None
    - increment_event_count(record_id) -> None (levanta em falha)
    """

    @abstractmethod
    async def lookup(self, routing_key: str) -> RoutingRecord | None:
        """Busca o registro pela routing key.

        Returns:
            RoutingRecord ou None se ausente.
        """

    @abstractmethod
    async def increment_event_count(self, record_id: str) -> None:
        """Incrementa o contador de eventos (telemetria, sem transação).

        Raises:
            InfrastructureError: Se o store estiver indisponível.
        """

    async def ping(self) -> bool:
        """Checagem de prontidão. Stores sem conexão externa estão sempre prontos."""
        return True
