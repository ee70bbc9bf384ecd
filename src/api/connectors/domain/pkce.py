"""PKCE (Proof Key for Code Exchange) utilities.

Implements the S256 method from RFC 7636. The verifier is generated from
the secrets module (CSPRNG); a predictable verifier defeats PKCE.
"""

from __future__ import annotations

import base64
import hashlib
import secrets
from dataclasses import dataclass

MIN_VERIFIER_BYTES = 43
MAX_VERIFIER_BYTES = 128
DEFAULT_VERIFIER_BYTES = 128

CHALLENGE_METHOD = "S256"


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def generate_verifier(length: int = DEFAULT_VERIFIER_BYTES) -> str:
    """Generate a code verifier from ``length`` random bytes.

    The encoded verifier is about 4/3 of ``length`` characters, so the
    default of 128 bytes gives 171 characters. RFC 7636 caps verifiers at
    128 characters; providers that enforce the cap need ``length <= 96``.

    Args:
        length: Number of random bytes, between 43 and 128

    Returns:
        URL-safe base64 string without padding

    Raises:
        ValueError: If length is outside [43, 128]
    """
    if not MIN_VERIFIER_BYTES <= length <= MAX_VERIFIER_BYTES:
        raise ValueError(
            f"Verifier length must be between {MIN_VERIFIER_BYTES} and "
            f"{MAX_VERIFIER_BYTES}, got {length}"
        )
    return _b64url(secrets.token_bytes(length))


def derive_challenge(verifier: str) -> str:
    """Derive the S256 code challenge for a verifier."""
    return _b64url(hashlib.sha256(verifier.encode("utf-8")).digest())


@dataclass(frozen=True)
class PKCEPair:
    """A verifier and its challenge for one authorization attempt."""

    verifier: str
    challenge: str
    method: str = CHALLENGE_METHOD


def generate_pair(length: int = DEFAULT_VERIFIER_BYTES) -> PKCEPair:
    """Generate a fresh verifier/challenge pair."""
    verifier = generate_verifier(length)
    return PKCEPair(verifier=verifier, challenge=derive_challenge(verifier))
