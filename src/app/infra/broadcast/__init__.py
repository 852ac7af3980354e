"""Alvos de broadcast (hub de conexões ao vivo)."""

from app.infra.broadcast.hub_broadcast_target import ACCESS_TOKEN_HEADER, HubBroadcastTarget

__all__ = [
    "ACCESS_TOKEN_HEADER",
    "HubBroadcastTarget",
]
