"""Modelos de domínio do gateway."""

from app.domain.canonical_event import CanonicalEvent, fallback_event_id, now_ms
from app.domain.handshake import ChallengeRequest, ChallengeResponse
from app.domain.platforms import CONNECTION_TYPES, SUPPORTED_PLATFORMS, is_supported_platform
from app.domain.routing_record import RoutingRecord
from app.domain.verification import VerificationResult

__all__ = [
    "CONNECTION_TYPES",
    "SUPPORTED_PLATFORMS",
    "CanonicalEvent",
    "ChallengeRequest",
    "ChallengeResponse",
    "RoutingRecord",
    "VerificationResult",
    "fallback_event_id",
    "is_supported_platform",
    "now_ms",
]
