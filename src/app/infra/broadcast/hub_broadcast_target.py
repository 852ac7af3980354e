"""Alvo de broadcast HTTP — hub que mantém as conexões ao vivo.

Contrato do hub (endereçado por routing key, nunca por handle):
- POST {hub}/{routing_key}/broadcast        corpo = CanonicalEvent JSON
- GET  {hub}/{routing_key}/sse              stream text/event-stream
- WS   {hub_ws}/{routing_key}/ws            relay bidirecional

O token de acesso do registro é repassado em X-Proxy-Access-Token.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx
from websockets.asyncio.client import connect

from app.protocols.broadcast_target import BroadcastTargetProtocol
from utils.errors import BroadcastTargetError

if TYPE_CHECKING:
    from app.domain.canonical_event import CanonicalEvent

logger = logging.getLogger(__name__)

ACCESS_TOKEN_HEADER = "X-Proxy-Access-Token"

# Headers hop-by-hop não devem ser repassados ao hub
HOP_BY_HOP_HEADERS = frozenset(
    {
        "host",
        "connection",
        "keep-alive",
        "transfer-encoding",
        "upgrade",
        "content-length",
        "te",
        "trailer",
        "proxy-authorization",
        "proxy-authenticate",
    }
)


class HubBroadcastTarget(BroadcastTargetProtocol):
    """Hub de conexões acessado via HTTP/WebSocket.

    Args:
        base_url: URL base HTTP do hub
        websocket_url: URL base WS do hub
        client: httpx.AsyncClient compartilhado (injetável em testes)
        timeout_seconds: Timeout das chamadas de broadcast
    """

    def __init__(
        self,
        base_url: str,
        websocket_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._websocket_url = websocket_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)
        self._timeout_seconds = timeout_seconds

    def _url(self, routing_key: str, suffix: str) -> str:
        return f"{self._base_url}/{quote(routing_key, safe='')}/{suffix}"

    async def send(self, routing_key: str, event: CanonicalEvent) -> None:
        try:
            response = await self._client.post(
                self._url(routing_key, "broadcast"),
                json=event.to_wire(),
                timeout=self._timeout_seconds,
            )
        except httpx.HTTPError as exc:
            raise BroadcastTargetError("hub_unreachable") from exc

        if not response.is_success:
            raise BroadcastTargetError(
                "hub_broadcast_failed", status_code=response.status_code
            )

    async def open_event_stream(
        self,
        routing_key: str,
        *,
        headers: dict[str, str],
        access_token: str,
    ) -> httpx.Response:
        forwarded = {
            name: value
            for name, value in headers.items()
            if name.lower() not in HOP_BY_HOP_HEADERS
            and name.lower() != ACCESS_TOKEN_HEADER.lower()
        }
        forwarded[ACCESS_TOKEN_HEADER] = access_token
        request = self._client.build_request(
            "GET",
            self._url(routing_key, "sse"),
            headers=forwarded,
            # Streams de longa duração: sem timeout de leitura
            timeout=httpx.Timeout(self._timeout_seconds, read=None),
        )
        try:
            return await self._client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise BroadcastTargetError("hub_unreachable") from exc

    def connect_websocket(self, routing_key: str, *, access_token: str) -> Any:
        url = f"{self._websocket_url}/{quote(routing_key, safe='')}/ws"
        return connect(
            url,
            additional_headers={ACCESS_TOKEN_HEADER: access_token},
            open_timeout=self._timeout_seconds,
        )

    async def aclose(self) -> None:
        await self._client.aclose()
