"""Adapter Sentry (integration platform webhooks).

Assinatura: Sentry-Hook-Signature = HMAC-SHA256(client secret, corpo), hex puro.
Tipo do evento: Sentry-Hook-Resource + `action` (ex: "issue.created").
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.canonical_event import CanonicalEvent, fallback_event_id

from ._payload import as_object, dig, dotted, pick_headers, text
from .base import PlatformAdapter
from .signatures.hmac_sha256 import HmacSignatureVerifier

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import JsonValue

SIGNATURE_HEADER = "Sentry-Hook-Signature"
RESOURCE_HEADER = "Sentry-Hook-Resource"
REQUEST_ID_HEADER = "Request-ID"


class SentryAdapter(PlatformAdapter):
    platform = "sentry"

    def build_verifier(self, credential: str) -> HmacSignatureVerifier:
        return HmacSignatureVerifier(credential, SIGNATURE_HEADER)

    def transform(self, payload: JsonValue, headers: Mapping[str, str]) -> CanonicalEvent:
        body = as_object(payload)
        resource = headers.get(RESOURCE_HEADER.lower(), "")
        action = text(body.get("action"))
        request_id = headers.get(REQUEST_ID_HEADER.lower(), "")

        return CanonicalEvent(
            id=request_id or fallback_event_id(self.platform),
            platform=self.platform,
            type=dotted(resource, action) or "unknown",
            headers=pick_headers(headers, (RESOURCE_HEADER, REQUEST_ID_HEADER)),
            payload=payload,
            data={
                "resource": resource,
                "action": action,
                "installation": text(dig(body, "installation", "uuid")),
                "actor": text(dig(body, "actor", "name")),
                "issue_id": text(dig(body, "data", "issue", "id")),
            },
        )
