"""Agregador de settings do Hookrelay.

Re-exporta settings e funções de cada módulo.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.gateway import (
    GatewaySettings,
    RoutingStoreBackend,
    get_gateway_settings,
)

__all__ = [
    "BaseSettings",
    "Environment",
    "GatewaySettings",
    "RoutingStoreBackend",
    "get_base_settings",
    "get_gateway_settings",
]
