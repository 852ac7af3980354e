"""Adapter genérico para qualquer emissor que assine com HMAC-SHA256.

Assinatura: X-Webhook-Signature (com ou sem "sha256=") sobre
`X-Webhook-Timestamp ++ corpo`.
Tipo do evento: campo `type` ou `event` do corpo.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.canonical_event import CanonicalEvent, fallback_event_id

from ._payload import as_object, pick_headers, text
from .base import PlatformAdapter
from .signatures.hmac_sha256 import HmacSignatureVerifier

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import JsonValue

SIGNATURE_HEADER = "X-Webhook-Signature"
TIMESTAMP_HEADER = "X-Webhook-Timestamp"
EVENT_ID_HEADER = "X-Webhook-Id"


class GenericAdapter(PlatformAdapter):
    platform = "generic"

    def build_verifier(self, credential: str) -> HmacSignatureVerifier:
        return HmacSignatureVerifier(
            credential,
            SIGNATURE_HEADER,
            timestamp_header=TIMESTAMP_HEADER,
            prefix="sha256=",
            prefix_required=False,
        )

    def transform(self, payload: JsonValue, headers: Mapping[str, str]) -> CanonicalEvent:
        body = as_object(payload)
        event_id = headers.get(EVENT_ID_HEADER.lower(), "") or text(body.get("id"))

        return CanonicalEvent(
            id=event_id or fallback_event_id(self.platform),
            platform=self.platform,
            type=text(body.get("type")) or text(body.get("event")) or "webhook",
            headers=pick_headers(headers, (EVENT_ID_HEADER, TIMESTAMP_HEADER)),
            payload=payload,
            data=body,
        )
