"""Ed25519 com par de chaves derivado do segredo do tenant.

Usado pelo QQ Bot:
- Handshake (op 13): assina `event_ts ++ plain_token` e devolve hex.
- Eventos: verifica `timestamp ++ corpo` contra X-Signature-Ed25519.

Derivação da seed (restrição de interoperabilidade herdada da plataforma,
não uma escolha criptográfica): o texto do segredo é repetido até ter pelo
menos 32 caracteres, truncado em 32, codificado em UTF-8 e cortado nos
primeiros 32 bytes. A seed equivale ao `keyPair.fromSeed` do tweetnacl.
"""

from __future__ import annotations

import binascii
from typing import TYPE_CHECKING

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from app.domain.verification import VerificationResult

from .base import header_value

if TYPE_CHECKING:
    from collections.abc import Mapping

SEED_SIZE = 32
SIGNATURE_SIZE = 64

TIMESTAMP_HEADER = "X-Signature-Timestamp"
SIGNATURE_HEADER = "X-Signature-Ed25519"


def derive_seed(secret: str) -> bytes:
    """Estica o segredo para exatamente 32 bytes (repeat-and-truncate).

    Raises:
        ValueError: Se o segredo for vazio.
    """
    if not secret:
        raise ValueError("empty_secret")
    stretched = secret
    while len(stretched) < SEED_SIZE:
        stretched = (stretched * 2)[:SEED_SIZE]
    return stretched.encode("utf-8")[:SEED_SIZE]


def derive_private_key(secret: str) -> Ed25519PrivateKey:
    return Ed25519PrivateKey.from_private_bytes(derive_seed(secret))


def sign_message(secret: str, message: bytes) -> str:
    """Assina a mensagem e retorna a assinatura em hex minúsculo."""
    return derive_private_key(secret).sign(message).hex()


def decode_signature(signature_hex: str) -> bytes | None:
    """Decodifica hex (aceita prefixo 0x). None se inválido."""
    value = signature_hex.strip()
    if value.startswith(("0x", "0X")):
        value = value[2:]
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError):
        return None


def verify_message(secret: str, message: bytes, signature_hex: str) -> VerificationResult:
    """Verifica assinatura hex sobre a mensagem.

    Assinaturas cujo tamanho decodificado não é 64 bytes são INVALID sem
    tentar verificar.
    """
    signature = decode_signature(signature_hex)
    if signature is None or len(signature) != SIGNATURE_SIZE:
        return VerificationResult.INVALID
    public_key = derive_private_key(secret).public_key()
    try:
        public_key.verify(signature, message)
    except InvalidSignature:
        return VerificationResult.INVALID
    return VerificationResult.VALID


def sign_challenge(secret: str, event_ts: str, plain_token: str) -> str:
    """Assina o handshake. A ordem `event_ts ++ plain_token` é contrato externo."""
    return sign_message(secret, (event_ts + plain_token).encode("utf-8"))


class Ed25519SignatureVerifier:
    """Verifica eventos assinados sobre `timestamp ++ corpo bruto`."""

    def __init__(
        self,
        secret: str,
        *,
        timestamp_header: str = TIMESTAMP_HEADER,
        signature_header: str = SIGNATURE_HEADER,
    ) -> None:
        self._secret = secret
        self._timestamp_header = timestamp_header
        self._signature_header = signature_header

    def verify(self, raw_body: bytes, headers: Mapping[str, str]) -> VerificationResult:
        timestamp = header_value(headers, self._timestamp_header)
        signature = header_value(headers, self._signature_header)
        if not timestamp or not signature:
            return VerificationResult.INVALID
        return verify_message(self._secret, timestamp.encode("utf-8") + raw_body, signature)
