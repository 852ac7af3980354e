"""Helpers totais para navegar payloads JSON de formato desconhecido.

Nenhuma função aqui levanta exceção: formatos inesperados viram valores
padrão, para que `transform` nunca falhe.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from pydantic import JsonValue


def as_object(value: Any) -> dict[str, JsonValue]:
    """Retorna o valor se for objeto JSON; caso contrário, dict vazio."""
    return value if isinstance(value, dict) else {}


def dig(value: Any, *path: str) -> JsonValue:
    """Percorre objetos aninhados. None se algum nível faltar."""
    current = value
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def text(value: Any, default: str = "") -> str:
    """Converte escalares JSON em string; demais tipos viram `default`."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return default


def pick_headers(headers: Mapping[str, str], names: Iterable[str]) -> dict[str, str]:
    """Copia apenas os headers informativos presentes (nomes em minúsculo)."""
    picked: dict[str, str] = {}
    for name in names:
        value = headers.get(name.lower())
        if value:
            picked[name.lower()] = value
    return picked


def dotted(*parts: str) -> str:
    """Junta partes não vazias com ponto (ex: "issues.opened")."""
    return ".".join(part for part in parts if part)


def integer(value: Any) -> int | None:
    """Inteiro JSON (bool não conta) ou None."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value
