"""Adapter Jenkins (plugins de notificação por webhook).

Autenticação: X-Jenkins-Token com o token compartilhado.
Tipo do evento: "build.<phase>" (QUEUED, STARTED, COMPLETED, FINALIZED).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.canonical_event import CanonicalEvent, fallback_event_id

from ._payload import as_object, dig, dotted, text
from .base import PlatformAdapter
from .signatures.token import TokenVerifier

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import JsonValue

TOKEN_HEADER = "X-Jenkins-Token"


class JenkinsAdapter(PlatformAdapter):
    platform = "jenkins"

    def build_verifier(self, credential: str) -> TokenVerifier:
        return TokenVerifier(credential, TOKEN_HEADER)

    def transform(self, payload: JsonValue, headers: Mapping[str, str]) -> CanonicalEvent:
        body = as_object(payload)
        job_name = text(body.get("name"))
        build = as_object(body.get("build"))
        number = text(build.get("number"))
        phase = text(build.get("phase")).lower()
        event_id = (
            f"jenkins_{job_name}_{number}_{phase}"
            if job_name and number
            else fallback_event_id(self.platform)
        )

        return CanonicalEvent(
            id=event_id,
            platform=self.platform,
            type=dotted("build", phase) if phase else "build",
            headers={},
            payload=payload,
            data={
                "job": job_name,
                "build_number": number,
                "phase": phase,
                "status": text(build.get("status")),
                "url": text(build.get("full_url")) or text(build.get("url")),
                "branch": text(dig(build, "scm", "branch")),
            },
        )
