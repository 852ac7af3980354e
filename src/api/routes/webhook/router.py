"""Endpoints de webhook e de conexão ao vivo.

Endpoints:
- POST /{platform}/{routing_key}: recebimento de eventos inbound
- GET  /{platform}/{routing_key}/{connection_type}: SSE (ou 426 para ws
  sem upgrade)
- WS   /{platform}/{routing_key}/{connection_type}: relay websocket

Erros da taxonomia viram texto puro com status próprio; nenhum detalhe
interno é devolvido ao chamador.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response, WebSocket, status
from fastapi.responses import JSONResponse
from starlette.websockets import WebSocketState

from api.routes.webhook.connections import relay_websocket, stream_events
from api.routes.webhook.runtime import (
    get_broadcast_target,
    get_connection_use_case,
    get_dispatch_use_case,
)
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from utils.errors import GatewayError

logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_ERROR_MESSAGE = "Internal server error"
CORRELATION_HEADER = "x-correlation-id"


def _text_response(content: str, status_code: int) -> Response:
    return Response(content=content, media_type="text/plain", status_code=status_code)


def _error_response(exc: GatewayError, *, platform: str, routing_key: str) -> Response:
    logger.warning(
        "webhook_rejected",
        extra={
            "platform": platform,
            "routing_key": routing_key,
            "error_kind": exc.kind,
            "status_code": exc.status_code,
        },
    )
    return _text_response(exc.public_message, exc.status_code)


@router.post("/{platform}/{routing_key}", response_model=None)
async def receive_webhook(platform: str, routing_key: str, request: Request) -> Response:
    """Recebimento de chamadas inbound de qualquer plataforma suportada.

    Returns:
        Ack JSON da plataforma ou Response de erro em texto puro.
    """
    token = set_correlation_id(request.headers.get(CORRELATION_HEADER))
    try:
        raw_body = await request.body()
        try:
            result = await get_dispatch_use_case().execute(
                platform=platform,
                routing_key=routing_key,
                raw_body=raw_body,
                headers=dict(request.headers),
            )
        except GatewayError as exc:
            return _error_response(exc, platform=platform, routing_key=routing_key)
        except Exception:
            logger.exception(
                "webhook_processing_failed",
                extra={
                    "platform": platform,
                    "routing_key": routing_key,
                    "correlation_id": get_correlation_id(),
                },
            )
            return _text_response(INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)

        return JSONResponse(content=result.body, status_code=status.HTTP_200_OK)
    finally:
        reset_correlation_id(token)


@router.get("/{platform}/{routing_key}/{connection_type}", response_model=None)
async def open_connection(
    platform: str,
    routing_key: str,
    connection_type: str,
    request: Request,
) -> Response:
    """Conexão ao vivo via HTTP: SSE é repassado ao hub; ws exige upgrade."""
    token = set_correlation_id(request.headers.get(CORRELATION_HEADER))
    try:
        try:
            record = await get_connection_use_case().execute(
                platform=platform,
                routing_key=routing_key,
                connection_type=connection_type,
            )
        except GatewayError as exc:
            return _error_response(exc, platform=platform, routing_key=routing_key)

        if connection_type == "ws":
            return _text_response("Upgrade required", status.HTTP_426_UPGRADE_REQUIRED)

        try:
            return await stream_events(
                get_broadcast_target(),
                routing_key=routing_key,
                headers=dict(request.headers),
                access_token=record.access_token,
            )
        except Exception:
            logger.exception(
                "sse_stream_failed",
                extra={"platform": platform, "routing_key": routing_key},
            )
            return _text_response(INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)
    finally:
        reset_correlation_id(token)


@router.websocket("/{platform}/{routing_key}/{connection_type}")
async def websocket_connection(
    websocket: WebSocket,
    platform: str,
    routing_key: str,
    connection_type: str,
) -> None:
    """Relay websocket entre o assinante e o hub."""
    token = set_correlation_id(websocket.headers.get(CORRELATION_HEADER))
    try:
        try:
            record = await get_connection_use_case().execute(
                platform=platform,
                routing_key=routing_key,
                connection_type=connection_type,
            )
        except GatewayError as exc:
            logger.warning(
                "websocket_rejected",
                extra={"platform": platform, "routing_key": routing_key, "error_kind": exc.kind},
            )
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=exc.public_message)
            return

        if connection_type != "ws":
            await websocket.close(
                code=status.WS_1008_POLICY_VIOLATION, reason="Invalid connection type"
            )
            return

        try:
            await relay_websocket(
                websocket,
                get_broadcast_target(),
                routing_key=routing_key,
                access_token=record.access_token,
            )
        except Exception:
            logger.exception(
                "websocket_relay_error",
                extra={"platform": platform, "routing_key": routing_key},
            )
            if websocket.client_state is not WebSocketState.DISCONNECTED:
                await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
    finally:
        reset_correlation_id(token)
