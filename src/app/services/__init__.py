"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.retry import RetryPolicy, retry_always, retry_transient, with_retry

__all__ = [
    "RetryPolicy",
    "retry_always",
    "retry_transient",
    "with_retry",
]
