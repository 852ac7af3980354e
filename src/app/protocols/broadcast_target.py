"""Protocolo do alvo de broadcast (hub que mantém as conexões ao vivo).

O hub é endereçado por nome (routing key), nunca por um handle de conexão.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from contextlib import AbstractAsyncContextManager

    import httpx

    from app.domain.canonical_event import CanonicalEvent


class BroadcastTargetProtocol(ABC):
    """Contrato do hub de conexões."""

    @abstractmethod
    async def send(self, routing_key: str, event: CanonicalEvent) -> None:
        """Entrega o evento a quem estiver escutando na routing key.

        Raises:
            BroadcastTargetError: Resposta fora de 2xx ou hub inacessível.
        """

    @abstractmethod
    async def open_event_stream(
        self,
        routing_key: str,
        *,
        headers: dict[str, str],
        access_token: str,
    ) -> httpx.Response:
        """Abre stream SSE no hub. O chamador deve fechar a resposta."""

    @abstractmethod
    def connect_websocket(
        self,
        routing_key: str,
        *,
        access_token: str,
    ) -> AbstractAsyncContextManager[Any]:
        """Conecta ao websocket do hub para a routing key."""
