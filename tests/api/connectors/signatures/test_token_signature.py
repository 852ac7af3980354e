"""Testes do verificador por token em header."""

from __future__ import annotations

from api.connectors.signatures.token import TokenVerifier
from app.domain.verification import VerificationResult


def test_matching_token_is_valid() -> None:
    verifier = TokenVerifier("tok", "X-Gitlab-Token")

    assert verifier.verify(b"{}", {"x-gitlab-token": "tok"}) is VerificationResult.VALID


def test_mismatched_token_is_invalid() -> None:
    verifier = TokenVerifier("tok", "X-Gitlab-Token")

    assert verifier.verify(b"{}", {"x-gitlab-token": "other"}) is VerificationResult.INVALID


def test_missing_token_is_invalid() -> None:
    verifier = TokenVerifier("tok", "X-Gitlab-Token")

    assert verifier.verify(b"{}", {}) is VerificationResult.INVALID


def test_non_ascii_token_does_not_raise() -> None:
    verifier = TokenVerifier("tok", "X-Gitlab-Token")

    assert verifier.verify(b"{}", {"x-gitlab-token": "tók"}) is VerificationResult.INVALID
