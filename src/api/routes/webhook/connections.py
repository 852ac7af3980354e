"""Encaminhamento de conexões ao vivo para o hub.

- SSE: a resposta do hub é repassada em streaming, sem buffer
- WS: relay de frames nos dois sentidos entre o cliente e o hub
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask
from starlette.websockets import WebSocketDisconnect, WebSocketState
from websockets.exceptions import ConnectionClosed

if TYPE_CHECKING:
    from fastapi import WebSocket

    from app.protocols.broadcast_target import BroadcastTargetProtocol

logger = logging.getLogger(__name__)

SSE_MEDIA_TYPE = "text/event-stream"


async def stream_events(
    target: BroadcastTargetProtocol,
    *,
    routing_key: str,
    headers: dict[str, str],
    access_token: str,
) -> StreamingResponse:
    """Abre o stream SSE no hub e o devolve ao cliente."""
    upstream = await target.open_event_stream(
        routing_key, headers=headers, access_token=access_token
    )
    logger.info(
        "sse_stream_opened",
        extra={"routing_key": routing_key, "upstream_status": upstream.status_code},
    )
    return StreamingResponse(
        upstream.aiter_raw(),
        status_code=upstream.status_code,
        media_type=upstream.headers.get("content-type", SSE_MEDIA_TYPE),
        headers={"cache-control": "no-cache"},
        background=BackgroundTask(upstream.aclose),
    )


async def relay_websocket(
    websocket: WebSocket,
    target: BroadcastTargetProtocol,
    *,
    routing_key: str,
    access_token: str,
) -> None:
    """Aceita o cliente e repassa frames até um dos lados fechar."""
    async with target.connect_websocket(routing_key, access_token=access_token) as upstream:
        await websocket.accept()
        logger.info("websocket_relay_opened", extra={"routing_key": routing_key})
        pumps = [
            asyncio.create_task(_client_to_hub(websocket, upstream)),
            asyncio.create_task(_hub_to_client(websocket, upstream)),
        ]
        done, pending = await asyncio.wait(pumps, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        for task in done:
            exc = task.exception()
            if exc is not None:
                logger.warning(
                    "websocket_relay_failed",
                    extra={"routing_key": routing_key, "error_type": type(exc).__name__},
                )

    if websocket.client_state is WebSocketState.CONNECTED:
        await websocket.close()
    logger.info("websocket_relay_closed", extra={"routing_key": routing_key})


async def _client_to_hub(websocket: WebSocket, upstream: Any) -> None:
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                return
            if message.get("text") is not None:
                await upstream.send(message["text"])
            elif message.get("bytes") is not None:
                await upstream.send(message["bytes"])
    except WebSocketDisconnect:
        return


async def _hub_to_client(websocket: WebSocket, upstream: Any) -> None:
    try:
        async for message in upstream:
            if isinstance(message, str):
                await websocket.send_text(message)
            else:
                await websocket.send_bytes(message)
    except ConnectionClosed:
        return
