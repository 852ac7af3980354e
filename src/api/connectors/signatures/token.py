"""Autenticação por token compartilhado enviado em header.

Usado por plataformas que não assinam o corpo (GitLab, Telegram, Jenkins).
"""

from __future__ import annotations

import hmac
from typing import TYPE_CHECKING

from app.domain.verification import VerificationResult

from .base import header_value

if TYPE_CHECKING:
    from collections.abc import Mapping


class TokenVerifier:
    """Compara o token do header com o segredo em tempo constante."""

    def __init__(self, secret: str, header: str) -> None:
        self._secret = secret
        self._header = header

    def verify(self, raw_body: bytes, headers: Mapping[str, str]) -> VerificationResult:
        provided = header_value(headers, self._header)
        if not provided:
            return VerificationResult.INVALID
        if hmac.compare_digest(provided.encode("utf-8"), self._secret.encode("utf-8")):
            return VerificationResult.VALID
        return VerificationResult.INVALID
