"""Protocolo dos adapters de plataforma.

Os adapters vivem em api/connectors/ (borda); a Application depende apenas
deste contrato e recebe a factory via bootstrap.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import JsonValue

    from app.domain.canonical_event import CanonicalEvent
    from app.domain.handshake import ChallengeRequest, ChallengeResponse
    from app.domain.verification import VerificationResult


class MessageKind(Enum):
    """Tipo de mensagem identificado pelo discriminador do corpo."""

    HANDSHAKE = "handshake"
    EVENT = "event"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class AdapterOutcome:
    """Resultado do tratamento síncrono de uma chamada pelo adapter.

    Attributes:
        kind: Tipo de mensagem tratado
        body: Corpo JSON de resposta para a plataforma remota
    """

    kind: MessageKind
    body: dict[str, JsonValue] = field(default_factory=dict)

    @property
    def should_broadcast(self) -> bool:
        """Apenas eventos genuínos geram broadcast."""
        return self.kind is MessageKind.EVENT


class PlatformAdapterProtocol(Protocol):
    """Capacidades de um adapter: verify, respond_to_challenge, transform."""

    platform: str

    def handle(self, raw_body: bytes, headers: Mapping[str, str]) -> AdapterOutcome: ...

    def verify(self, raw_body: bytes, headers: Mapping[str, str]) -> VerificationResult: ...

    def respond_to_challenge(self, challenge: ChallengeRequest) -> ChallengeResponse: ...

    def transform(
        self, payload: JsonValue, headers: Mapping[str, str]
    ) -> CanonicalEvent: ...
