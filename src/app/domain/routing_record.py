"""RoutingRecord — configuração de tenant que liga uma routing key a uma plataforma.

Pertence ao store externo; o núcleo apenas lê.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RoutingRecord(BaseModel):
    """Registro de roteamento de um tenant.

    `routing_key` é globalmente única e identifica o destino do broadcast.
    `credential` nunca deve aparecer em logs ou respostas.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    routing_key: str = Field(..., min_length=1)
    platform: str
    active: bool = True
    credential: str = Field(default="", repr=False)
    event_count: int = Field(default=0, ge=0)

    # Desligar verificação é um caminho de confiança reduzida (logado)
    verify_signature: bool = True
    # Repassado ao hub nas conexões ao vivo (X-Proxy-Access-Token)
    access_token: str = Field(default="", repr=False)
