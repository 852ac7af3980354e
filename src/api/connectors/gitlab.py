"""Adapter GitLab.

Autenticação: X-Gitlab-Token com o token secreto configurado no projeto.
Tipo do evento: `object_kind` do corpo, com fallback para X-Gitlab-Event.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.canonical_event import CanonicalEvent, fallback_event_id

from ._payload import as_object, dig, pick_headers, text
from .base import PlatformAdapter
from .signatures.token import TokenVerifier

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import JsonValue

TOKEN_HEADER = "X-Gitlab-Token"
EVENT_HEADER = "X-Gitlab-Event"
EVENT_UUID_HEADER = "X-Gitlab-Event-UUID"

FORWARDED_HEADERS = (EVENT_HEADER, EVENT_UUID_HEADER, "X-Gitlab-Instance")


class GitLabAdapter(PlatformAdapter):
    platform = "gitlab"

    def build_verifier(self, credential: str) -> TokenVerifier:
        return TokenVerifier(credential, TOKEN_HEADER)

    def transform(self, payload: JsonValue, headers: Mapping[str, str]) -> CanonicalEvent:
        body = as_object(payload)
        header_event = headers.get(EVENT_HEADER.lower(), "")
        object_kind = text(body.get("object_kind"))
        event_uuid = headers.get(EVENT_UUID_HEADER.lower(), "")

        return CanonicalEvent(
            id=event_uuid or fallback_event_id(self.platform),
            platform=self.platform,
            type=object_kind or header_event or "unknown",
            headers=pick_headers(headers, FORWARDED_HEADERS),
            payload=payload,
            data={
                "object_kind": object_kind,
                "event_name": text(body.get("event_name")) or header_event,
                "project": text(dig(body, "project", "path_with_namespace")),
                "user": text(body.get("user_username")) or text(dig(body, "user", "username")),
                "ref": text(body.get("ref")),
                "action": text(dig(body, "object_attributes", "action")),
            },
        )
