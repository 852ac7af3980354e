"""Exceções do gateway de webhooks.

Duas famílias:
- GatewayError: falhas do pipeline síncrono, cada uma com status HTTP e
  mensagem pública definidos (sem detalhes internos).
- InfrastructureError: falhas transitórias de dependências externas.
"""

from __future__ import annotations


class GatewayError(Exception):
    """Base para falhas do pipeline de dispatch.

    Attributes:
        kind: Classificação estável usada em logs e métricas
        status_code: Status HTTP devolvido ao chamador
        public_message: Corpo de resposta seguro (sem segredos/stack)
    """

    kind: str = "GatewayError"
    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, public_message: str | None = None, *, detail: str | None = None) -> None:
        if public_message is not None:
            self.public_message = public_message
        self.detail = detail
        super().__init__(detail or self.public_message)


class InvalidPlatformError(GatewayError):
    kind = "InvalidPlatform"
    status_code = 400
    public_message = "Invalid platform"


class InvalidConnectionTypeError(GatewayError):
    kind = "InvalidConnectionType"
    status_code = 400
    public_message = "Invalid connection type"


class ProxyNotFoundError(GatewayError):
    kind = "ProxyNotFound"
    status_code = 404
    public_message = "Proxy not found"


class ProxyInactiveError(GatewayError):
    kind = "ProxyInactive"
    status_code = 403
    public_message = "Proxy is inactive"


class PlatformMismatchError(GatewayError):
    kind = "PlatformMismatch"
    status_code = 400
    public_message = "Platform mismatch"


class DBTimeoutError(GatewayError):
    """Lookup de roteamento excedeu o timeout (transitório, não é 'ausente')."""

    kind = "DBTimeout"
    status_code = 500
    public_message = "Database timeout"


class AdapterCreationError(GatewayError):
    kind = "AdapterCreationFailed"
    status_code = 500
    public_message = "Failed to create adapter"


class AdapterNotImplementedError(AdapterCreationError):
    """Plataforma conhecida pelo roteamento, mas sem adapter registrado."""


class SignatureInvalidError(GatewayError):
    kind = "SignatureInvalid"
    status_code = 401
    public_message = "Invalid signature"


class MalformedPayloadError(GatewayError):
    kind = "MalformedPayload"
    status_code = 400
    public_message = "Invalid JSON payload"


class MalformedRequestError(GatewayError):
    kind = "MalformedRequest"
    status_code = 400
    public_message = "Invalid request format"


class ServerConfigurationError(GatewayError):
    """Credencial exigida mas ausente no registro de roteamento."""

    kind = "ServerConfigurationError"
    status_code = 500
    public_message = "Server configuration error"


class BroadcastFailureError(GatewayError):
    """Falha de broadcast em background. Apenas registrada, nunca respondida."""

    kind = "BroadcastFailure"


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""


class BroadcastTargetError(InfrastructureError):
    """Hub de conexões respondeu fora de 2xx ou ficou inacessível."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def classify_error(exc: BaseException) -> str:
    """Retorna a classificação estável de uma exceção para métricas."""
    if isinstance(exc, GatewayError):
        return exc.kind
    if isinstance(exc, InfrastructureError):
        return "Infrastructure"
    return "Unknown"
