"""Verificadores de assinatura por esquema.

- hmac_sha256: segredo compartilhado sobre `timestamp ++ corpo`
- stripe: variante `t.corpo` com tolerância de replay
- token: token compartilhado em header
- ed25519: par de chaves derivado do segredo (challenge/response e eventos)
"""

from .base import SignatureVerifier, header_value
from .ed25519 import (
    Ed25519SignatureVerifier,
    derive_seed,
    sign_challenge,
    sign_message,
    verify_message,
)
from .hmac_sha256 import HmacSignatureVerifier, build_signed_message, compute_hmac_hex
from .stripe import StripeSignatureVerifier, parse_stripe_header
from .token import TokenVerifier

__all__ = [
    "Ed25519SignatureVerifier",
    "HmacSignatureVerifier",
    "SignatureVerifier",
    "StripeSignatureVerifier",
    "TokenVerifier",
    "build_signed_message",
    "compute_hmac_hex",
    "derive_seed",
    "header_value",
    "parse_stripe_header",
    "sign_challenge",
    "sign_message",
    "verify_message",
]
