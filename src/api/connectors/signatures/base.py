"""Contrato comum dos verificadores de assinatura."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.domain.verification import VerificationResult


class SignatureVerifier(Protocol):
    """Verifica uma chamada inbound a partir do corpo bruto e dos headers.

    Nunca levanta para header malformado: entrada malformada é INVALID.
    """

    def verify(self, raw_body: bytes, headers: Mapping[str, str]) -> VerificationResult: ...


def header_value(headers: Mapping[str, str], name: str) -> str:
    """Lê header sem diferenciar maiúsculas (string vazia se ausente)."""
    value = headers.get(name.lower())
    if value is None:
        value = headers.get(name, "")
    return value.strip()
