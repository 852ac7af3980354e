"""Adapter Stripe.

Assinatura: Stripe-Signature (`t=...,v1=...`) sobre `t.corpo`, com
tolerância de replay configurável (GATEWAY_STRIPE_TOLERANCE_SECONDS).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.canonical_event import CanonicalEvent, fallback_event_id

from ._payload import as_object, dig, integer, text
from .base import PlatformAdapter
from .signatures.stripe import DEFAULT_TOLERANCE_SECONDS, StripeSignatureVerifier

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import JsonValue


class StripeAdapter(PlatformAdapter):
    platform = "stripe"

    def build_verifier(self, credential: str) -> StripeSignatureVerifier:
        tolerance = (
            self._settings.stripe_tolerance_seconds
            if self._settings is not None
            else DEFAULT_TOLERANCE_SECONDS
        )
        return StripeSignatureVerifier(credential, tolerance_seconds=tolerance)

    def transform(self, payload: JsonValue, headers: Mapping[str, str]) -> CanonicalEvent:
        body = as_object(payload)

        return CanonicalEvent(
            id=text(body.get("id")) or fallback_event_id(self.platform),
            platform=self.platform,
            type=text(body.get("type")) or "unknown",
            headers={},
            payload=payload,
            data={
                "livemode": body.get("livemode") is True,
                "api_version": text(body.get("api_version")),
                "object_type": text(dig(body, "data", "object", "object")),
                "object_id": text(dig(body, "data", "object", "id")),
                "created": integer(body.get("created")),
            },
        )
