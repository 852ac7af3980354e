"""Resultado tri-state da verificação de assinatura."""

from __future__ import annotations

from enum import Enum


class VerificationResult(Enum):
    """Resultado de verificação.

    NOT_APPLICABLE: verificação desligada para o tenant ou não exigida para
    o tipo de mensagem. Comparar sempre por membro (`is`), nunca por
    truthiness: os três membros são verdadeiros em contexto booleano.
    """

    VALID = "valid"
    INVALID = "invalid"
    NOT_APPLICABLE = "not_applicable"
