"""Autenticação por segredo compartilhado (HMAC-SHA256).

Mensagem byte-exata: `timestamp ++ corpo bruto`. Plataformas sem header
de timestamp usam prefixo vazio (apenas o corpo).
"""

from __future__ import annotations

import hashlib
import hmac
from typing import TYPE_CHECKING

from app.domain.verification import VerificationResult

from .base import header_value

if TYPE_CHECKING:
    from collections.abc import Mapping

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def compute_hmac_hex(secret: str, message: bytes) -> str:
    """HMAC-SHA256 em hex minúsculo."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def build_signed_message(timestamp: str, raw_body: bytes) -> bytes:
    """Concatena `timestamp ++ corpo` exatamente como a plataforma assina."""
    return timestamp.encode("utf-8") + raw_body


class HmacSignatureVerifier:
    """Verificador HMAC-SHA256 parametrizado por headers da plataforma.

    Args:
        secret: Segredo compartilhado do tenant
        signature_header: Header com o código de autenticação
        timestamp_header: Header com o timestamp (None = sem prefixo)
        prefix: Prefixo do valor (ex: "sha256=")
        prefix_required: Se False, aceita o hex sem prefixo
    """

    def __init__(
        self,
        secret: str,
        signature_header: str,
        *,
        timestamp_header: str | None = None,
        prefix: str | None = None,
        prefix_required: bool = True,
    ) -> None:
        self._secret = secret
        self._signature_header = signature_header
        self._timestamp_header = timestamp_header
        self._prefix = prefix
        self._prefix_required = prefix_required

    def verify(self, raw_body: bytes, headers: Mapping[str, str]) -> VerificationResult:
        provided = self._extract_digest(header_value(headers, self._signature_header))
        if provided is None:
            return VerificationResult.INVALID

        timestamp = ""
        if self._timestamp_header is not None:
            timestamp = header_value(headers, self._timestamp_header)
            if not timestamp:
                return VerificationResult.INVALID

        expected = compute_hmac_hex(self._secret, build_signed_message(timestamp, raw_body))
        if hmac.compare_digest(expected, provided.lower()):
            return VerificationResult.VALID
        return VerificationResult.INVALID

    def _extract_digest(self, value: str) -> str | None:
        if not value:
            return None
        if self._prefix:
            if value.startswith(self._prefix):
                value = value[len(self._prefix):]
            elif self._prefix_required:
                return None
        if not value or not set(value) <= HEX_DIGITS:
            return None
        return value
