"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AdapterCreationError,
    AdapterNotImplementedError,
    BroadcastFailureError,
    BroadcastTargetError,
    DBTimeoutError,
    GatewayError,
    InfrastructureError,
    InvalidConnectionTypeError,
    InvalidPlatformError,
    MalformedPayloadError,
    MalformedRequestError,
    PlatformMismatchError,
    ProxyInactiveError,
    ProxyNotFoundError,
    RedisConnectionError,
    ServerConfigurationError,
    SignatureInvalidError,
    classify_error,
)

__all__ = [
    "AdapterCreationError",
    "AdapterNotImplementedError",
    "BroadcastFailureError",
    "BroadcastTargetError",
    "DBTimeoutError",
    "GatewayError",
    "InfrastructureError",
    "InvalidConnectionTypeError",
    "InvalidPlatformError",
    "MalformedPayloadError",
    "MalformedRequestError",
    "PlatformMismatchError",
    "ProxyInactiveError",
    "ProxyNotFoundError",
    "RedisConnectionError",
    "ServerConfigurationError",
    "SignatureInvalidError",
    "classify_error",
]
