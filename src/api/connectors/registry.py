"""Registry de adapters — seleciona e constrói o adapter de um RoutingRecord.

Mapeamento total de tag de plataforma -> classe. Uma plataforma aceita pelo
roteamento mas sem adapter aqui gera AdapterNotImplementedError, nunca um
adapter padrão/no-op.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.platforms import SUPPORTED_PLATFORMS
from utils.errors import AdapterNotImplementedError, InvalidPlatformError

from .generic import GenericAdapter
from .github import GitHubAdapter
from .gitlab import GitLabAdapter
from .jenkins import JenkinsAdapter
from .jira import JiraAdapter
from .qqbot import QQBotAdapter
from .sentry import SentryAdapter
from .stripe import StripeAdapter
from .telegram import TelegramAdapter

if TYPE_CHECKING:
    from app.domain.routing_record import RoutingRecord
    from config.settings import GatewaySettings

    from .base import PlatformAdapter

logger = logging.getLogger(__name__)

ADAPTER_REGISTRY: dict[str, type[PlatformAdapter]] = {
    adapter.platform: adapter
    for adapter in (
        GitHubAdapter,
        GitLabAdapter,
        QQBotAdapter,
        TelegramAdapter,
        StripeAdapter,
        JenkinsAdapter,
        JiraAdapter,
        SentryAdapter,
        GenericAdapter,
    )
}


def create_adapter(
    record: RoutingRecord,
    settings: GatewaySettings | None = None,
    registry: dict[str, type[PlatformAdapter]] | None = None,
) -> PlatformAdapter:
    """Constrói o adapter vinculado à credencial do registro.

    Args:
        record: Registro de roteamento já validado
        settings: Settings do gateway repassadas ao adapter
        registry: Mapeamento alternativo (testes)

    Raises:
        InvalidPlatformError: Plataforma desconhecida pelo roteamento.
        AdapterNotImplementedError: Plataforma conhecida sem adapter.
    """
    adapters = ADAPTER_REGISTRY if registry is None else registry
    if record.platform not in SUPPORTED_PLATFORMS:
        raise InvalidPlatformError(detail=f"unknown_platform:{record.platform}")

    adapter_cls = adapters.get(record.platform)
    if adapter_cls is None:
        logger.error(
            "adapter_not_implemented",
            extra={"platform": record.platform, "routing_key": record.routing_key},
        )
        raise AdapterNotImplementedError(detail=f"adapter_not_implemented:{record.platform}")

    return adapter_cls(record, settings)
