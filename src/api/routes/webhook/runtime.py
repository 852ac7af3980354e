"""Dependências lazy das rotas de webhook (inicializadas na primeira requisição)."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.protocols.broadcast_target import BroadcastTargetProtocol
    from app.use_cases.webhook import DispatchWebhookUseCase, OpenConnectionUseCase

_dispatch_use_case: DispatchWebhookUseCase | None = None
_connection_use_case: OpenConnectionUseCase | None = None


def get_dispatch_use_case() -> DispatchWebhookUseCase:
    global _dispatch_use_case
    if _dispatch_use_case is None:
        from app.bootstrap.dependencies import create_dispatch_use_case

        _dispatch_use_case = create_dispatch_use_case()
    return _dispatch_use_case


def get_connection_use_case() -> OpenConnectionUseCase:
    global _connection_use_case
    if _connection_use_case is None:
        from app.bootstrap.dependencies import create_connection_use_case

        _connection_use_case = create_connection_use_case()
    return _connection_use_case


def get_broadcast_target() -> BroadcastTargetProtocol:
    from app.bootstrap import get_broadcast_target as _get_broadcast_target

    return _get_broadcast_target()
