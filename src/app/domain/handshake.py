"""Par de handshake challenge/response (prova de posse do segredo).

Criado pela plataforma remota, respondido de forma síncrona, nunca persistido.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, JsonValue


class ChallengeRequest(BaseModel):
    """Desafio recebido: token opaco + timestamp do evento.

    Ambos mantêm o tipo JSON original (string ou número).
    """

    model_config = ConfigDict(frozen=True)

    plain_token: JsonValue
    event_ts: JsonValue


class ChallengeResponse(BaseModel):
    """Resposta: token ecoado com tipo preservado + assinatura hex minúscula."""

    model_config = ConfigDict(frozen=True)

    plain_token: JsonValue
    signature: str

    def to_body(self) -> dict[str, JsonValue]:
        return {"plain_token": self.plain_token, "signature": self.signature}
