"""App — orquestração, casos de uso e infraestrutura do gateway.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: dispatch, broadcast e conexões (sem IO direto)
- services/: serviços de aplicação (retry)
- infra/: implementações concretas de IO (stores, hub)
- protocols/: contratos/interfaces
- domain/: modelos do domínio (registro, evento canônico, handshake)
- observability/: correlation_id e métricas via logs estruturados

Padrão: app executa; api adapta; utils apoia.
"""
