"""Authorization URL builder.

Builds the provider authorize URL with a PKCE challenge and the state
envelope that carries the verifier back to the callback.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode

from connectors.application.observability import CallbackProbe, DefaultCallbackProbe
from connectors.domain.pkce import PKCEPair, generate_pair
from connectors.domain.state import OAuthState, StateCodec
from connectors.infrastructure.providers import (
    ProviderCredentials,
    ProviderDescriptor,
    resolve_endpoint,
)
from connectors.ports.exceptions import UnsupportedProviderError
from infrastructure.settings import Settings


@dataclass(frozen=True)
class AuthorizationRequest:
    """An authorization URL and what went into it."""

    url: str
    state: str
    pkce: PKCEPair


class AuthorizationService:
    """Builds provider authorization redirects."""

    def __init__(
        self,
        settings: Settings,
        state_codec: StateCodec,
        probe: CallbackProbe | None = None,
    ):
        self._settings = settings
        self._state_codec = state_codec
        self._probe = probe or DefaultCallbackProbe()

    def build_authorization_url(
        self,
        provider: ProviderDescriptor,
        credentials: ProviderCredentials,
        integration_name: str,
        pkce: PKCEPair | None = None,
    ) -> AuthorizationRequest:
        """Build the authorize URL for one connection attempt.

        Args:
            provider: Provider to authorize against
            credentials: Client registration for the provider
            integration_name: Display name the integration will be stored under
            pkce: PKCE pair; a fresh one is generated when omitted

        Returns:
            AuthorizationRequest with the absolute URL to redirect to

        Raises:
            UnsupportedProviderError: If the provider has no OAuth flow
        """
        if not provider.supports_oauth:
            raise UnsupportedProviderError(
                f"{provider.display_name} does not use OAuth"
            )
        assert provider.authorize_url is not None

        pkce = pkce or generate_pair()
        state = self._state_codec.encode(
            OAuthState(
                integration_type=provider.integration_type.value,
                integration_name=integration_name,
                code_verifier=pkce.verifier,
            )
        )

        params = {
            "client_id": credentials.client_id,
            "redirect_uri": credentials.redirect_uri,
            "scope": provider.scope,
            "response_type": "code",
            "code_challenge": pkce.challenge,
            "code_challenge_method": pkce.method,
            "state": state,
            **provider.authorize_params,
        }
        authorize_url = resolve_endpoint(provider.authorize_url, self._settings)

        self._probe.authorization_started(provider.key, integration_name)
        return AuthorizationRequest(
            url=f"{authorize_url}?{urlencode(params)}",
            state=state,
            pkce=pkce,
        )
