"""Adapter Telegram Bot API.

Autenticação: X-Telegram-Bot-Api-Secret-Token (secret_token do setWebhook).
Tipo do evento: a chave de update presente (message, callback_query, ...).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.canonical_event import CanonicalEvent, fallback_event_id

from ._payload import as_object, dig, text
from .base import PlatformAdapter
from .signatures.token import TokenVerifier

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import JsonValue

SECRET_TOKEN_HEADER = "X-Telegram-Bot-Api-Secret-Token"

UPDATE_KINDS = (
    "message",
    "edited_message",
    "channel_post",
    "edited_channel_post",
    "callback_query",
    "inline_query",
    "chosen_inline_result",
    "shipping_query",
    "pre_checkout_query",
    "poll",
    "poll_answer",
    "my_chat_member",
    "chat_member",
    "chat_join_request",
)


def _update_kind(body: dict[str, JsonValue]) -> str:
    for kind in UPDATE_KINDS:
        if kind in body:
            return kind
    # Tipos novos da Bot API: primeira chave além de update_id
    return next((key for key in body if key != "update_id"), "")


class TelegramAdapter(PlatformAdapter):
    platform = "telegram"

    def build_verifier(self, credential: str) -> TokenVerifier:
        return TokenVerifier(credential, SECRET_TOKEN_HEADER)

    def transform(self, payload: JsonValue, headers: Mapping[str, str]) -> CanonicalEvent:
        body = as_object(payload)
        update_id = text(body.get("update_id"))
        kind = _update_kind(body)
        update = body.get(kind) if kind else None
        chat_id = text(dig(update, "chat", "id")) or text(dig(update, "message", "chat", "id"))

        return CanonicalEvent(
            id=f"telegram_{update_id}" if update_id else fallback_event_id(self.platform),
            platform=self.platform,
            type=kind or "unknown",
            headers={},
            payload=payload,
            data={
                "update_id": update_id,
                "update_kind": kind,
                "chat_id": chat_id,
                "from_id": text(dig(update, "from", "id")),
                "text": text(dig(update, "text")),
            },
        )
