"""Protocolos e contratos do core da aplicação."""

from .adapter import AdapterOutcome, MessageKind, PlatformAdapterProtocol
from .broadcast_target import BroadcastTargetProtocol
from .routing_store import RoutingStoreProtocol

__all__ = [
    "AdapterOutcome",
    "BroadcastTargetProtocol",
    "MessageKind",
    "PlatformAdapterProtocol",
    "RoutingStoreProtocol",
]
