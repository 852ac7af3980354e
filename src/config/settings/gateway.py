"""Settings do gateway de webhooks.

Timeouts do lookup de roteamento, política de retry do broadcast,
backend do store e endereço do hub de conexões.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal, cast

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

RoutingStoreBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class GatewaySettings:
    """Configurações do pipeline de dispatch.

    Attributes:
        lookup_timeout_seconds: Espera máxima pelo store de roteamento
        retry_max_attempts: Tentativas por efeito colateral do broadcast
        retry_initial_delay_seconds: Atraso antes da segunda tentativa
        max_background_tasks: Limite de broadcasts concorrentes
        routing_store_backend: Backend do store de roteamento (memory|redis)
        hub_base_url: URL base do hub que mantém as conexões ao vivo
        hub_timeout_seconds: Timeout das chamadas ao hub
        stripe_tolerance_seconds: Janela aceita para o timestamp do Stripe
    """

    lookup_timeout_seconds: float = 5.0
    retry_max_attempts: int = 3
    retry_initial_delay_seconds: float = 0.1
    max_background_tasks: int = 100
    routing_store_backend: RoutingStoreBackend = "memory"
    hub_base_url: str = "http://localhost:8787"
    hub_timeout_seconds: float = 10.0
    stripe_tolerance_seconds: int = 300

    @property
    def hub_websocket_url(self) -> str:
        """URL base do hub com esquema websocket."""
        if self.hub_base_url.startswith("https://"):
            return "wss://" + self.hub_base_url[len("https://"):]
        if self.hub_base_url.startswith("http://"):
            return "ws://" + self.hub_base_url[len("http://"):]
        return self.hub_base_url

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações do gateway.

        Args:
            base: BaseSettings para verificar ambiente e Redis.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.lookup_timeout_seconds <= 0:
            errors.append("GATEWAY_LOOKUP_TIMEOUT_SECONDS deve ser > 0")

        if self.retry_max_attempts < 1:
            errors.append("GATEWAY_RETRY_MAX_ATTEMPTS deve ser >= 1")

        if self.retry_initial_delay_seconds < 0:
            errors.append("GATEWAY_RETRY_INITIAL_DELAY_SECONDS deve ser >= 0")

        if self.max_background_tasks < 1:
            errors.append("GATEWAY_MAX_BACKGROUND_TASKS deve ser >= 1")

        if self.routing_store_backend not in ("memory", "redis"):
            errors.append(f"GATEWAY_ROUTING_STORE inválido: {self.routing_store_backend}")

        if self.routing_store_backend == "memory" and not base.is_development:
            errors.append(
                "GATEWAY_ROUTING_STORE=memory proibido em staging/production. Use Redis."
            )

        if self.routing_store_backend == "redis" and not base.redis_url:
            errors.append("GATEWAY_ROUTING_STORE=redis requer REDIS_URL configurado")

        if not self.hub_base_url.startswith(("http://", "https://")):
            errors.append("GATEWAY_HUB_BASE_URL deve começar com http:// ou https://")

        if self.hub_timeout_seconds <= 0:
            errors.append("GATEWAY_HUB_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> GatewaySettings:
    backend = cast("RoutingStoreBackend", os.getenv("GATEWAY_ROUTING_STORE", "memory").lower())
    return GatewaySettings(
        lookup_timeout_seconds=float(os.getenv("GATEWAY_LOOKUP_TIMEOUT_SECONDS", "5")),
        retry_max_attempts=int(os.getenv("GATEWAY_RETRY_MAX_ATTEMPTS", "3")),
        retry_initial_delay_seconds=float(
            os.getenv("GATEWAY_RETRY_INITIAL_DELAY_SECONDS", "0.1")
        ),
        max_background_tasks=int(os.getenv("GATEWAY_MAX_BACKGROUND_TASKS", "100")),
        routing_store_backend=backend,
        hub_base_url=os.getenv("GATEWAY_HUB_BASE_URL", "http://localhost:8787").rstrip("/"),
        hub_timeout_seconds=float(os.getenv("GATEWAY_HUB_TIMEOUT_SECONDS", "10")),
        stripe_tolerance_seconds=int(os.getenv("GATEWAY_STRIPE_TOLERANCE_SECONDS", "300")),
    )


@lru_cache(maxsize=1)
def get_gateway_settings() -> GatewaySettings:
    """Retorna instância cacheada de GatewaySettings."""
    return _load_from_env()
