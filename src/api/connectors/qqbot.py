"""Adapter QQ Bot (webhook HTTP).

Opcodes tratados:
- 13: validação do endereço de callback (handshake). Responde
  `{"plain_token": <eco>, "signature": hex(sign(event_ts ++ plain_token))}`.
- 0: dispatch de evento. Exige Ed25519 válido sobre `timestamp ++ corpo`
  e responde com o ACK de callback HTTP (op 12).
- Outros: ack nativo (op 12), sem broadcast.

Headers: X-Signature-Timestamp, X-Signature-Ed25519. X-Bot-Appid e
User-Agent são apenas informativos (não conferem confiança).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from app.domain.canonical_event import CanonicalEvent, fallback_event_id
from app.domain.handshake import ChallengeRequest, ChallengeResponse
from app.protocols.adapter import MessageKind
from utils.errors import MalformedRequestError, ServerConfigurationError

from ._payload import as_object, integer, text
from .base import PlatformAdapter
from .signatures.ed25519 import Ed25519SignatureVerifier, sign_challenge

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import JsonValue

logger = logging.getLogger(__name__)

OP_DISPATCH = 0
OP_HTTP_CALLBACK_ACK = 12
OP_CALLBACK_VALIDATION = 13

EXPECTED_USER_AGENT = "QQBot-Callback"


def _is_missing(value: JsonValue) -> bool:
    return value is None or value == ""


class QQBotAdapter(PlatformAdapter):
    platform = "qqbot"
    event_ack: ClassVar[dict[str, Any]] = {"op": OP_HTTP_CALLBACK_ACK}

    def build_verifier(self, credential: str) -> Ed25519SignatureVerifier:
        return Ed25519SignatureVerifier(credential)

    def classify(self, payload: JsonValue, headers: Mapping[str, str]) -> MessageKind:
        if not isinstance(payload, dict):
            raise MalformedRequestError(detail="payload_not_object")

        user_agent = headers.get("user-agent", "")
        if user_agent and user_agent != EXPECTED_USER_AGENT:
            logger.info("qqbot_unexpected_user_agent", extra={"routing_key": self._routing_key})

        op = payload.get("op")
        if isinstance(op, bool) or not isinstance(op, int):
            return MessageKind.UNRECOGNIZED
        if op == OP_CALLBACK_VALIDATION:
            return MessageKind.HANDSHAKE
        if op == OP_DISPATCH:
            return MessageKind.EVENT
        return MessageKind.UNRECOGNIZED

    def build_challenge(self, payload: JsonValue) -> ChallengeRequest:
        data = payload.get("d") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise MalformedRequestError(detail="challenge_data_missing")
        plain_token = data.get("plain_token")
        event_ts = data.get("event_ts")
        if _is_missing(plain_token) or _is_missing(event_ts):
            raise MalformedRequestError(detail="challenge_fields_missing")
        return ChallengeRequest(plain_token=plain_token, event_ts=event_ts)

    def respond_to_challenge(self, challenge: ChallengeRequest) -> ChallengeResponse:
        if not self._credential:
            raise ServerConfigurationError(detail="missing_credential")
        # event_ts pode chegar como número; a assinatura usa a forma textual
        signature = sign_challenge(
            self._credential,
            text(challenge.event_ts),
            text(challenge.plain_token),
        )
        return ChallengeResponse(plain_token=challenge.plain_token, signature=signature)

    def transform(self, payload: JsonValue, headers: Mapping[str, str]) -> CanonicalEvent:
        body = as_object(payload)
        op = body.get("op")
        op_text = text(op)
        event_type = text(body.get("t"))
        sequence = body.get("s")
        event_id = text(body.get("id"))
        data = body.get("d")

        return CanonicalEvent(
            id=event_id or fallback_event_id(self.platform),
            platform=self.platform,
            type=event_type or f"op_{op_text or 'unknown'}",
            headers={
                "x-qqbot-op": op_text,
                "x-qqbot-seq": text(sequence),
                "x-qqbot-event-type": event_type,
            },
            payload=data,
            data={
                "opcode": integer(op),
                "event_type": event_type,
                "sequence": integer(sequence) or 0,
                "event_id": event_id,
                "event_data": data,
            },
        )
