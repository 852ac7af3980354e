"""Adapter Jira (webhooks do Jira Cloud com segredo).

Assinatura: X-Hub-Signature = "sha256=" + HMAC-SHA256(segredo, corpo).
Tipo do evento: `webhookEvent` (ex: "jira:issue_updated").
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.canonical_event import CanonicalEvent, fallback_event_id

from ._payload import as_object, dig, pick_headers, text
from .base import PlatformAdapter
from .signatures.hmac_sha256 import HmacSignatureVerifier

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import JsonValue

SIGNATURE_HEADER = "X-Hub-Signature"
IDENTIFIER_HEADER = "X-Atlassian-Webhook-Identifier"


class JiraAdapter(PlatformAdapter):
    platform = "jira"

    def build_verifier(self, credential: str) -> HmacSignatureVerifier:
        return HmacSignatureVerifier(credential, SIGNATURE_HEADER, prefix="sha256=")

    def transform(self, payload: JsonValue, headers: Mapping[str, str]) -> CanonicalEvent:
        body = as_object(payload)
        identifier = headers.get(IDENTIFIER_HEADER.lower(), "")

        return CanonicalEvent(
            id=identifier or fallback_event_id(self.platform),
            platform=self.platform,
            type=text(body.get("webhookEvent")) or "unknown",
            headers=pick_headers(headers, (IDENTIFIER_HEADER,)),
            payload=payload,
            data={
                "issue_key": text(dig(body, "issue", "key")),
                "issue_event_type": text(body.get("issue_event_type_name")),
                "project": text(dig(body, "issue", "fields", "project", "key")),
                "user": text(dig(body, "user", "accountId")) or text(dig(body, "user", "name")),
            },
        )
