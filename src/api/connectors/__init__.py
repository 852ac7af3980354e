"""Connectors por plataforma — adapters de borda para webhooks inbound.

Cada adapter combina verificação de assinatura, handshake opcional e
transformação para CanonicalEvent:
- github, jira, sentry, generic: HMAC-SHA256
- stripe: HMAC-SHA256 com timestamp e tolerância
- gitlab, telegram, jenkins: token compartilhado
- qqbot: Ed25519 derivado do segredo + handshake op 13
"""

from .base import PlatformAdapter
from .registry import ADAPTER_REGISTRY, create_adapter

__all__ = [
    "ADAPTER_REGISTRY",
    "PlatformAdapter",
    "create_adapter",
]
