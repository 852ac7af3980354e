"""API — camada de borda: adapters de plataforma e rotas HTTP.

Responsabilidades:
- Receber chamadas das plataformas remotas (webhooks)
- Verificar assinaturas e responder handshakes
- Converter payloads de plataforma em CanonicalEvent
- Encaminhar conexões de assinantes ao hub

Subpastas:
- connectors/: um adapter por plataforma + verificadores de assinatura
- routes/: endpoints HTTP (webhook, conexões, health)

NÃO PODE conter: orquestração de use cases, IO de stores.
"""
