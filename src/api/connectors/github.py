"""Adapter GitHub.

Assinatura: X-Hub-Signature-256 = "sha256=" + HMAC-SHA256(segredo, corpo).
Tipo do evento: X-GitHub-Event, sufixado com `action` quando presente
(ex: "pull_request.opened").
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

SIGNATURE_HEADER = "X-Hub-Signature-256"
EVENT_HEADER = "X-GitHub-Event"
DELIVERY_HEADER = "X-GitHub-Delivery"

FORWARDED_HEADERS = (EVENT_HEADER, DELIVERY_HEADER, "X-GitHub-Hook-ID")


class GitHubAdapter(PlatformAdapter):
    platform = "github"

    def build_verifier(self, credential: str) -> HmacSignatureVerifier:
        return HmacSignatureVerifier(credential, SIGNATURE_HEADER, prefix="sha256=")

    def transform(self, payload: JsonValue, headers: Mapping[str, str]) -> CanonicalEvent:
        body = as_object(payload)
        event = headers.get(EVENT_HEADER.lower(), "")
        action = text(body.get("action"))
        delivery_id = headers.get(DELIVERY_HEADER.lower(), "")

        return CanonicalEvent(
            id=delivery_id or fallback_event_id(self.platform),
            platform=self.platform,
            type=dotted(event, action) or "unknown",
            headers=pick_headers(headers, FORWARDED_HEADERS),
            payload=payload,
            data={
                "event": event,
                "action": action,
                "delivery_id": delivery_id,
                "repository": text(dig(body, "repository", "full_name")),
                "sender": text(dig(body, "sender", "login")),
                "ref": text(body.get("ref")),
            },
        )
