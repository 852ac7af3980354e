"""Testes da assinatura Ed25519 com seed derivada do segredo."""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from api.connectors.signatures.ed25519 import (
    Ed25519SignatureVerifier,
    derive_seed,
    sign_challenge,
    sign_message,
    verify_message,
)
from app.domain.verification import VerificationResult

SECRET = "naOC0ocQE3shWLAfffVLB1rhYPG7"


class TestDeriveSeed:
    def test_short_secret_is_repeated_and_truncated(self) -> None:
        assert derive_seed("abc") == b"abcabcabcabcabcabcabcabcabcabcab"

    def test_single_character_secret(self) -> None:
        assert derive_seed("x") == b"x" * 32

    def test_long_secret_is_truncated(self) -> None:
        secret = "0123456789" * 5
        assert derive_seed(secret) == secret[:32].encode()

    def test_exact_length_secret_is_unchanged(self) -> None:
        secret = "a" * 32
        assert derive_seed(secret) == secret.encode()

    def test_multibyte_secret_is_cut_at_32_bytes(self) -> None:
        seed = derive_seed("é" * 40)
        assert len(seed) == 32
        assert seed == ("é" * 16).encode("utf-8")

    def test_empty_secret_raises(self) -> None:
        with pytest.raises(ValueError, match="empty_secret"):
            derive_seed("")

    def test_seed_matches_cryptography_keypair(self) -> None:
        message = b"hello"
        expected = Ed25519PrivateKey.from_private_bytes(derive_seed(SECRET)).sign(message)
        assert sign_message(SECRET, message) == expected.hex()


class TestSignAndVerify:
    def test_round_trip(self) -> None:
        signature = sign_message(SECRET, b"payload")

        assert verify_message(SECRET, b"payload", signature) is VerificationResult.VALID

    def test_signature_is_lowercase_hex_of_64_bytes(self) -> None:
        signature = sign_message(SECRET, b"payload")

        assert len(signature) == 128
        assert signature == signature.lower()

    def test_flipped_message_byte_is_invalid(self) -> None:
        signature = sign_message(SECRET, b"payload")

        assert verify_message(SECRET, b"paylaod", signature) is VerificationResult.INVALID

    def test_signature_from_other_secret_is_invalid(self) -> None:
        signature = sign_message("another-secret", b"payload")

        assert verify_message(SECRET, b"payload", signature) is VerificationResult.INVALID

    def test_hex_prefix_is_accepted(self) -> None:
        signature = "0x" + sign_message(SECRET, b"payload")

        assert verify_message(SECRET, b"payload", signature) is VerificationResult.VALID

    @pytest.mark.parametrize("signature", ["", "abcd", "zz" * 64, "00" * 63, "00" * 65])
    def test_malformed_or_wrong_length_signature_is_invalid(self, signature: str) -> None:
        assert verify_message(SECRET, b"payload", signature) is VerificationResult.INVALID


class TestSignChallenge:
    def test_signs_event_ts_then_plain_token(self) -> None:
        signature = sign_challenge(SECRET, "1725442341", "Arq0D5A61EgUu4OxUvOp")

        message = b"1725442341Arq0D5A61EgUu4OxUvOp"
        assert verify_message(SECRET, message, signature) is VerificationResult.VALID

    def test_swapped_order_does_not_verify(self) -> None:
        signature = sign_challenge(SECRET, "1725442341", "Arq0D5A61EgUu4OxUvOp")

        message = b"Arq0D5A61EgUu4OxUvOp1725442341"
        assert verify_message(SECRET, message, signature) is VerificationResult.INVALID


class TestEd25519SignatureVerifier:
    def test_valid_event_signature(self) -> None:
        body = b'{"op":0}'
        signature = sign_message(SECRET, b"1700000000" + body)
        headers = {"x-signature-timestamp": "1700000000", "x-signature-ed25519": signature}

        assert Ed25519SignatureVerifier(SECRET).verify(body, headers) is VerificationResult.VALID

    def test_body_then_timestamp_order_is_invalid(self) -> None:
        body = b'{"op":0}'
        signature = sign_message(SECRET, body + b"1700000000")
        headers = {"x-signature-timestamp": "1700000000", "x-signature-ed25519": signature}

        assert Ed25519SignatureVerifier(SECRET).verify(body, headers) is VerificationResult.INVALID

    def test_missing_headers_are_invalid(self) -> None:
        verifier = Ed25519SignatureVerifier(SECRET)

        assert verifier.verify(b"{}", {}) is VerificationResult.INVALID
        assert verifier.verify(b"{}", {"x-signature-timestamp": "1"}) is VerificationResult.INVALID
