"""Assinatura do Stripe: header `Stripe-Signature: t=<ts>,v1=<hex>[,v1=...]`.

Mensagem: `t ++ "." ++ corpo`. Timestamps fora da tolerância são rejeitados
para limitar replay.
"""

from __future__ import annotations

import hmac
import time
from typing import TYPE_CHECKING

from app.domain.verification import VerificationResult

from .base import header_value
from .hmac_sha256 import HEX_DIGITS, compute_hmac_hex

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

STRIPE_SIGNATURE_HEADER = "Stripe-Signature"
DEFAULT_TOLERANCE_SECONDS = 300


def parse_stripe_header(value: str) -> tuple[str, list[str]]:
    """Extrai (timestamp, assinaturas v1) do header. Elementos malformados são ignorados."""
    timestamp = ""
    signatures: list[str] = []
    for item in value.split(","):
        key, sep, item_value = item.strip().partition("=")
        if not sep:
            continue
        if key == "t":
            timestamp = item_value
        elif key == "v1" and item_value and set(item_value) <= HEX_DIGITS:
            signatures.append(item_value.lower())
    return timestamp, signatures


class StripeSignatureVerifier:
    def __init__(
        self,
        secret: str,
        *,
        tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._secret = secret
        self._tolerance_seconds = tolerance_seconds
        self._clock = clock

    def verify(self, raw_body: bytes, headers: Mapping[str, str]) -> VerificationResult:
        timestamp, signatures = parse_stripe_header(
            header_value(headers, STRIPE_SIGNATURE_HEADER)
        )
        if not timestamp.isdigit() or not signatures:
            return VerificationResult.INVALID

        if self._tolerance_seconds > 0:
            age = abs(self._clock() - int(timestamp))
            if age > self._tolerance_seconds:
                return VerificationResult.INVALID

        expected = compute_hmac_hex(self._secret, f"{timestamp}.".encode() + raw_body)
        if any(hmac.compare_digest(expected, candidate) for candidate in signatures):
            return VerificationResult.VALID
        return VerificationResult.INVALID
