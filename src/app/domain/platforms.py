"""Plataformas de origem aceitas no segmento de rota `/{platform}/...`."""

from __future__ import annotations

SUPPORTED_PLATFORMS: frozenset[str] = frozenset(
    {
        "github",
        "gitlab",
        "qqbot",
        "telegram",
        "stripe",
        "jenkins",
        "jira",
        "sentry",
        "generic",
    }
)

# Tipos de conexão ao vivo aceitos em GET /{platform}/{routing_key}/{type}
CONNECTION_TYPES: frozenset[str] = frozenset({"ws", "sse"})


def is_supported_platform(platform: str) -> bool:
    return platform in SUPPORTED_PLATFORMS
