"""Retry limitado para efeitos colaterais do broadcast.

Um único executor genérico (`with_retry`) recebe uma `RetryPolicy` por
call site, em vez de laços de retry reimplementados em cada chamada.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from utils.errors import BroadcastTargetError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")


def retry_always(exc: Exception, attempt_index: int) -> bool:
    """Predicado padrão: continua enquanto houver tentativas."""
    return True


def retry_transient(exc: Exception, attempt_index: int) -> bool:
    """Interrompe cedo em respostas 4xx do hub (exceto 408/429)."""
    if isinstance(exc, BroadcastTargetError) and exc.status_code is not None:
        status = exc.status_code
        return not (400 <= status < 500 and status not in (408, 429))
    return True


@dataclass(frozen=True)
class RetryPolicy:
    """Política de retry.

    Attributes:
        max_attempts: Total de tentativas (>= 1)
        initial_delay: Espera em segundos antes da segunda tentativa
        should_continue: Consultado após cada falha com (erro, índice da tentativa)
        backoff_factor: Multiplicador da espera a cada nova tentativa
    """

    max_attempts: int = 3
    initial_delay: float = 0.1
    should_continue: Callable[[Exception, int], bool] = retry_always
    backoff_factor: float = 2.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts deve ser >= 1")
        if self.initial_delay < 0:
            raise ValueError("initial_delay deve ser >= 0")

    def delay_for(self, attempt_index: int) -> float:
        return self.initial_delay * (self.backoff_factor**attempt_index)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    operation_name: str = "operation",
) -> T:
    """Executa `operation` segundo a política.

    Args:
        operation: Fábrica de awaitable (chamada a cada tentativa)
        policy: Política de retry
        operation_name: Nome para logs

    Returns:
        Resultado da primeira tentativa bem-sucedida.

    Raises:
        Exception: A última falha, quando as tentativas acabam ou o
            predicado pede para parar.
    """
    attempt_index = 0
    while True:
        try:
            return await operation()
        except Exception as exc:
            logger.warning(
                "retry_attempt_failed",
                extra={
                    "operation": operation_name,
                    "attempt": attempt_index + 1,
                    "max_attempts": policy.max_attempts,
                    "error_type": type(exc).__name__,
                },
            )
            is_last = attempt_index + 1 >= policy.max_attempts
            if is_last or not policy.should_continue(exc, attempt_index):
                raise
            await asyncio.sleep(policy.delay_for(attempt_index))
            attempt_index += 1
