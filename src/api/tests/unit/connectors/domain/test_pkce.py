"""Unit tests for PKCE generation."""

import base64
import hashlib

import pytest

from connectors.domain.pkce import (
    derive_challenge,
    generate_pair,
    generate_verifier,
)


def _reference_challenge(verifier: str) -> str:
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).decode().rstrip("=")


class TestGenerateVerifier:
    """Tests for verifier generation."""

    @pytest.mark.parametrize("length", [43, 64, 100, 128])
    def test_verifier_is_url_safe_and_unpadded(self, length):
        """Verifier should contain no '+', '/' or '='."""
        verifier = generate_verifier(length)

        assert "+" not in verifier
        assert "/" not in verifier
        assert "=" not in verifier

    def test_verifier_encodes_requested_number_of_bytes(self):
        """128 random bytes encode to 171 base64url characters."""
        assert len(generate_verifier(128)) == 171
        assert len(generate_verifier(43)) == 58
        assert len(generate_verifier(96)) == 128

    def test_default_length_is_128(self):
        assert len(generate_verifier()) == 171

    @pytest.mark.parametrize("length", [0, 42, 129])
    def test_rejects_out_of_range_length(self, length):
        with pytest.raises(ValueError):
            generate_verifier(length)

    def test_verifiers_differ(self):
        assert generate_verifier() != generate_verifier()


class TestDeriveChallenge:
    """Tests for S256 challenge derivation."""

    @pytest.mark.parametrize("length", [43, 77, 128])
    def test_matches_independent_sha256_base64url(self, length):
        verifier = generate_verifier(length)

        assert derive_challenge(verifier) == _reference_challenge(verifier)

    def test_is_deterministic(self):
        verifier = generate_verifier()

        assert derive_challenge(verifier) == derive_challenge(verifier)

    def test_rfc7636_appendix_b_vector(self):
        """Known vector from RFC 7636 Appendix B."""
        verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"

        assert derive_challenge(verifier) == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"


class TestGeneratePair:
    """Tests for the pair entry point."""

    def test_pair_challenge_matches_verifier(self):
        pair = generate_pair()

        assert pair.challenge == _reference_challenge(pair.verifier)
        assert pair.method == "S256"

    def test_different_verifiers_give_different_challenges(self):
        first, second = generate_pair(), generate_pair()

        assert first.verifier != second.verifier
        assert first.challenge != second.challenge
