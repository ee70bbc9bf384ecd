"""Unit tests for the OAuth state envelope."""

import json

import pytest

from connectors.domain.state import InvalidStateError, OAuthState, StateCodec


@pytest.fixture
def state() -> OAuthState:
    return OAuthState(
        integration_type="google_workspace",
        integration_name="Acme Workspace",
        code_verifier="verifier-123",
    )


class TestUnsignedState:
    """State without a signing key."""

    def test_encodes_documented_json_shape(self, state):
        encoded = StateCodec().encode(state)

        assert json.loads(encoded) == {
            "integrationType": "google_workspace",
            "integrationName": "Acme Workspace",
            "codeVerifier": "verifier-123",
        }

    def test_decode_round_trips(self, state):
        codec = StateCodec()

        assert codec.decode(codec.encode(state)) == state

    def test_accepts_state_built_by_other_clients(self):
        raw = json.dumps({"integrationName": "X", "codeVerifier": "v"})

        decoded = StateCodec().decode(raw)

        assert decoded.integration_name == "X"
        assert decoded.code_verifier == "v"
        assert decoded.integration_type is None

    @pytest.mark.parametrize("raw", ["not-json", "[1, 2]", '"text"', "{"])
    def test_rejects_unparseable_state(self, raw):
        with pytest.raises(InvalidStateError):
            StateCodec().decode(raw)

    def test_rejects_non_string_fields(self):
        with pytest.raises(InvalidStateError):
            StateCodec().decode(json.dumps({"codeVerifier": 123}))


class TestSignedState:
    """State protected by an HMAC signature."""

    def test_adds_signature_member(self, state):
        envelope = json.loads(StateCodec("secret").encode(state))

        assert "signature" in envelope
        assert envelope["codeVerifier"] == "verifier-123"

    def test_signed_round_trip(self, state):
        codec = StateCodec("secret")

        assert codec.decode(codec.encode(state)) == state

    def test_rejects_tampered_verifier(self, state):
        codec = StateCodec("secret")
        envelope = json.loads(codec.encode(state))
        envelope["codeVerifier"] = "attacker-verifier"

        with pytest.raises(InvalidStateError):
            codec.decode(json.dumps(envelope))

    def test_rejects_missing_signature(self, state):
        unsigned = StateCodec().encode(state)

        with pytest.raises(InvalidStateError):
            StateCodec("secret").decode(unsigned)

    def test_rejects_signature_from_other_key(self, state):
        forged = StateCodec("other").encode(state)

        with pytest.raises(InvalidStateError):
            StateCodec("secret").decode(forged)
