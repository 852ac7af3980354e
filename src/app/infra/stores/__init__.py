"""Stores — implementações concretas do store de roteamento.

Módulos disponíveis:
    - redis_routing_store: Store usando Redis (Upstash)
    - memory_routing_store: Store em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.memory_routing_store import MemoryRoutingStore
from app.infra.stores.redis_routing_store import RedisRoutingStore

__all__ = [
    "MemoryRoutingStore",
    "RedisRoutingStore",
]
