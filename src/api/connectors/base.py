"""PlatformAdapter — unidade polimórfica por plataforma.

Combina um verificador de assinatura, um respondedor de handshake opcional
e a transformação payload -> CanonicalEvent.

Fluxo de `handle` para uma chamada:
1. Parse do JSON (MalformedPayloadError)
2. Classificação pelo discriminador (handshake | evento | desconhecido)
3. Handshake: resposta síncrona assinada, sem verificação prévia
   (a própria resposta prova a posse do segredo)
4. Demais mensagens: verificação obrigatória, salvo se desligada para o
   tenant (caminho de confiança reduzida, logado)
5. Evento ou mensagem desconhecida: ack da plataforma (só eventos geram broadcast)

O adapter é stateless além da credencial vinculada. Não reutilizar entre
registros de roteamento com credenciais diferentes.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from app.domain.verification import VerificationResult
from app.protocols.adapter import AdapterOutcome, MessageKind
from utils.errors import (
    MalformedPayloadError,
    MalformedRequestError,
    ServerConfigurationError,
    SignatureInvalidError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import JsonValue

    from app.domain.canonical_event import CanonicalEvent
    from app.domain.handshake import ChallengeRequest, ChallengeResponse
    from app.domain.routing_record import RoutingRecord
    from config.settings import GatewaySettings

    from .signatures import SignatureVerifier

logger = logging.getLogger(__name__)

GENERIC_ACK: dict[str, Any] = {"status": "received"}


def normalize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Cópia dos headers com nomes em minúsculo."""
    return {name.lower(): value for name, value in headers.items()}


def parse_json_body(raw_body: bytes) -> JsonValue:
    """Parse do corpo bruto.

    Raises:
        MalformedPayloadError: Corpo vazio, não-UTF-8, JSON inválido ou
            aninhamento/inteiros além dos limites do parser.
    """
    try:
        return json.loads(raw_body)
    except (ValueError, RecursionError) as exc:
        raise MalformedPayloadError(detail="invalid_json") from exc


class PlatformAdapter(ABC):
    """Base dos adapters de plataforma.

    Subclasses definem `platform`, `build_verifier` e `transform`; as que
    possuem handshake sobrescrevem `classify`, `build_challenge` e
    `respond_to_challenge`.
    """

    platform: ClassVar[str]
    event_ack: ClassVar[dict[str, Any]] = GENERIC_ACK

    def __init__(
        self,
        record: RoutingRecord,
        settings: GatewaySettings | None = None,
    ) -> None:
        self._credential = record.credential
        self._verify_enabled = record.verify_signature
        self._routing_key = record.routing_key
        self._settings = settings

    # ──────────────────────────────────────────────────────────────
    # Capacidades
    # ──────────────────────────────────────────────────────────────

    @abstractmethod
    def build_verifier(self, credential: str) -> SignatureVerifier:
        """Constrói o verificador do esquema da plataforma."""

    @abstractmethod
    def transform(self, payload: JsonValue, headers: Mapping[str, str]) -> CanonicalEvent:
        """Converte o payload em CanonicalEvent. Total: nunca levanta."""

    def verify(self, raw_body: bytes, headers: Mapping[str, str]) -> VerificationResult:
        """Verifica a chamada.

        Raises:
            ServerConfigurationError: Verificação ligada sem credencial.
        """
        if not self._verify_enabled:
            return VerificationResult.NOT_APPLICABLE
        if not self._credential:
            raise ServerConfigurationError(detail="missing_credential")
        return self.build_verifier(self._credential).verify(raw_body, normalize_headers(headers))

    def classify(self, payload: JsonValue, headers: Mapping[str, str]) -> MessageKind:
        """Plataformas sem handshake tratam todo corpo como evento."""
        return MessageKind.EVENT

    def build_challenge(self, payload: JsonValue) -> ChallengeRequest:
        raise MalformedRequestError(detail=f"{self.platform}_has_no_challenge")

    def respond_to_challenge(self, challenge: ChallengeRequest) -> ChallengeResponse:
        raise MalformedRequestError(detail=f"{self.platform}_has_no_challenge")

    # ──────────────────────────────────────────────────────────────
    # Tratamento de uma chamada
    # ──────────────────────────────────────────────────────────────

    def handle(self, raw_body: bytes, headers: Mapping[str, str]) -> AdapterOutcome:
        """Trata uma chamada inbound de forma síncrona.

        Raises:
            MalformedPayloadError: JSON inválido
            MalformedRequestError: Formato errado para o tipo declarado
            ServerConfigurationError: Credencial exigida e ausente
            SignatureInvalidError: Assinatura inválida
        """
        headers = normalize_headers(headers)
        payload = parse_json_body(raw_body)
        kind = self.classify(payload, headers)

        if kind is MessageKind.HANDSHAKE:
            response = self.respond_to_challenge(self.build_challenge(payload))
            logger.info(
                "webhook_challenge_answered",
                extra={"platform": self.platform, "routing_key": self._routing_key},
            )
            return AdapterOutcome(kind=kind, body=response.to_body())

        self._ensure_authentic(raw_body, headers)

        if kind is MessageKind.UNRECOGNIZED:
            logger.warning(
                "webhook_unrecognized_message",
                extra={"platform": self.platform, "routing_key": self._routing_key},
            )

        return AdapterOutcome(kind=kind, body=dict(self.event_ack))

    def _ensure_authentic(self, raw_body: bytes, headers: Mapping[str, str]) -> None:
        result = self.verify(raw_body, headers)
        if result is VerificationResult.NOT_APPLICABLE:
            logger.warning(
                "signature_verification_disabled",
                extra={
                    "platform": self.platform,
                    "routing_key": self._routing_key,
                    "trust": "reduced",
                },
            )
            return
        if result is not VerificationResult.VALID:
            logger.warning(
                "webhook_signature_invalid",
                extra={"platform": self.platform, "routing_key": self._routing_key},
            )
            raise SignatureInvalidError(detail="signature_mismatch")
