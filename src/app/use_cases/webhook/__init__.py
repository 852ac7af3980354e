"""Use cases do gateway de webhooks."""

from .broadcast import BroadcastEventUseCase
from .connection import OpenConnectionUseCase
from .dispatch import BroadcastJob, DispatchResult, DispatchWebhookUseCase

__all__ = [
    "BroadcastEventUseCase",
    "BroadcastJob",
    "DispatchResult",
    "DispatchWebhookUseCase",
    "OpenConnectionUseCase",
]
