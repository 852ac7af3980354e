"""Registro de métricas via structured logging.

As métricas são logs estruturados agregáveis depois (Cloud Logging,
BigQuery, etc.).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Resultado de webhook: classificação de cada chamada inbound
  (success | error + error_kind) com latência total

Uso:
    with WebhookOutcomeTimer("github", "k1") as timer:
        ...
        timer.fail("ProxyNotFound")
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Literal

from utils.errors import classify_error

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

OutcomeResult = Literal["success", "error"]


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "routing_store", "broadcast")
        operation: Nome da operação (ex: "lookup", "send")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_webhook_outcome(
    platform: str,
    routing_key: str,
    result: OutcomeResult,
    latency_ms: float,
    error_kind: str | None = None,
) -> None:
    """Registra o resultado de uma chamada inbound.

    Args:
        platform: Segmento de plataforma da URL
        routing_key: Chave de roteamento da URL
        result: success ou error
        latency_ms: Duração total do caminho síncrono
        error_kind: Classificação do erro (ex: DBTimeout)
    """
    log = logger.info if result == "success" else logger.warning
    log(
        "metric_webhook_outcome",
        extra={
            "metric_type": "webhook_outcome",
            "platform": platform,
            "routing_key": routing_key,
            "result": result,
            "error_kind": error_kind,
            "latency_ms": round(latency_ms, 2),
        },
    )


class WebhookOutcomeTimer:
    """Context manager que mede e registra o resultado de uma chamada.

    Exceções que atravessam o bloco são classificadas automaticamente;
    falhas tratadas dentro do bloco podem ser marcadas via `fail()`.
    """

    def __init__(self, platform: str, routing_key: str) -> None:
        self.platform = platform
        self.routing_key = routing_key
        self.error_kind: str | None = None
        self._started_at = 0.0

    def __enter__(self) -> WebhookOutcomeTimer:
        self._started_at = time.perf_counter()
        return self

    def fail(self, error_kind: str) -> None:
        self.error_kind = error_kind

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc is not None:
            self.error_kind = classify_error(exc)
        latency_ms = (time.perf_counter() - self._started_at) * 1000
        record_webhook_outcome(
            self.platform,
            self.routing_key,
            "error" if self.error_kind else "success",
            latency_ms,
            error_kind=self.error_kind,
        )
