"""OAuth ``state`` envelope.

The state parameter is the only channel that carries the PKCE verifier
from the authorize request to the callback; no server-side session is
kept. The envelope is a JSON object::

    {"integrationType": ..., "integrationName": ..., "codeVerifier": ...}

When a signing key is configured a ``signature`` member is added: the hex
HMAC-SHA256 of the canonical JSON of the three fields. The state is
visible to the browser either way.
"""

from __future__ import annotations

import hashlib
import hmac
import json
from dataclasses import dataclass
from typing import Any


class InvalidStateError(ValueError):
    """Raised when the state cannot be parsed or fails verification."""


@dataclass(frozen=True)
class OAuthState:
    """Decoded OAuth state."""

    integration_type: str | None = None
    integration_name: str | None = None
    code_verifier: str | None = None

    def payload(self) -> dict[str, Any]:
        return {
            "integrationType": self.integration_type,
            "integrationName": self.integration_name,
            "codeVerifier": self.code_verifier,
        }


def _canonical(payload: dict[str, Any]) -> bytes:
    return json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidStateError("State fields must be strings")
    return value or None


class StateCodec:
    """Encodes and decodes the OAuth state, optionally signing it."""

    def __init__(self, signing_key: str | None = None):
        self._key = signing_key.encode("utf-8") if signing_key else None

    def _sign(self, payload: dict[str, Any]) -> str:
        assert self._key is not None
        return hmac.new(self._key, _canonical(payload), hashlib.sha256).hexdigest()

    def encode(self, state: OAuthState) -> str:
        """Serialize the state to the string sent in the authorize URL."""
        payload = state.payload()
        envelope = dict(payload)
        if self._key is not None:
            envelope["signature"] = self._sign(payload)
        return json.dumps(envelope, separators=(",", ":"))

    def decode(self, raw: str) -> OAuthState:
        """Parse and verify a state string echoed back by the provider.

        Raises:
            InvalidStateError: On malformed JSON, wrong types, or a missing
                or mismatched signature when signing is enabled
        """
        try:
            envelope = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise InvalidStateError(f"State is not valid JSON: {e}") from e

        if not isinstance(envelope, dict):
            raise InvalidStateError("State must be a JSON object")

        state = OAuthState(
            integration_type=_optional_str(envelope.get("integrationType")),
            integration_name=_optional_str(envelope.get("integrationName")),
            code_verifier=_optional_str(envelope.get("codeVerifier")),
        )

        if self._key is not None:
            signature = envelope.get("signature")
            if not isinstance(signature, str):
                raise InvalidStateError("State signature missing")
            expected = self._sign(
                {
                    "integrationType": envelope.get("integrationType"),
                    "integrationName": envelope.get("integrationName"),
                    "codeVerifier": envelope.get("codeVerifier"),
                }
            )
            if not hmac.compare_digest(signature, expected):
                raise InvalidStateError("State signature mismatch")

        return state
