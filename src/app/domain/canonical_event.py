"""CanonicalEvent — envelope normalizado produzido por todos os adapters.

Imutável após construção; é a unidade entregue ao hub de broadcast.
`payload` e `data` são JSON semi-estruturado (JsonValue do pydantic:
null | bool | número | string | lista | objeto).
"""

from __future__ import annotations

import time
import uuid

from pydantic import BaseModel, ConfigDict, Field, JsonValue


def now_ms() -> int:
    """Timestamp atual em milissegundos."""
    return int(time.time() * 1000)


def fallback_event_id(platform: str) -> str:
    """Id para plataformas que não enviam identificador próprio."""
    return f"{platform}_{uuid.uuid4().hex}"


class CanonicalEvent(BaseModel):
    """Evento canônico entregue aos assinantes."""

    model_config = ConfigDict(frozen=True)

    id: str
    platform: str
    type: str
    timestamp: int = Field(default_factory=now_ms)
    headers: dict[str, str] = Field(default_factory=dict)
    payload: JsonValue = None
    data: JsonValue = Field(default_factory=dict)

    def to_wire(self) -> dict[str, JsonValue]:
        """Serializa para o formato JSON enviado ao hub."""
        return self.model_dump(mode="json")
