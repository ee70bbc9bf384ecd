"""OAuth callback handler.

One handler for every OAuth provider, parameterized by a
ProviderDescriptor. Every outcome is a redirect to the landing page
carrying either ``success=true&integration=<name>`` or ``error=<code>``;
nothing raises past ``handle``.

Stages: received, validated, token_exchanged, integration_persisted,
synced, redirected. Any stage can short-circuit to error_redirected.
Token exchange plus integration insert is the commit point: a sync
failure after it is logged and the operator still sees success.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Callable
from urllib.parse import quote, urlencode

from connectors.application.observability import CallbackProbe, DefaultCallbackProbe
from connectors.application.services.sync_service import SyncService
from connectors.domain.state import InvalidStateError, OAuthState, StateCodec
from connectors.domain.value_objects import (
    CallbackError,
    CallbackResult,
    CallbackStage,
    SyncOutcome,
)
from connectors.infrastructure.oauth_client import OAuthTokenClient
from connectors.infrastructure.providers import (
    ProviderCredentials,
    ProviderDescriptor,
    provider_config,
    resolve_endpoint,
)
from connectors.ports.exceptions import TokenExchangeError
from directory.application.services import IntegrationService
from directory.ports.exceptions import IntegrationCreationError
from infrastructure.settings import Settings


def build_landing_redirect(landing_url: str, params: dict[str, str]) -> str:
    """Append query parameters to the landing URL, percent-encoding spaces."""
    separator = "&" if "?" in landing_url else "?"
    return f"{landing_url}{separator}{urlencode(params, quote_via=quote)}"


class OAuthCallbackService:
    """Handles the provider redirect after user consent."""

    def __init__(
        self,
        settings: Settings,
        state_codec: StateCodec,
        token_client: OAuthTokenClient,
        integration_service: IntegrationService,
        sync_service: SyncService,
        credentials_resolver: Callable[[ProviderDescriptor], ProviderCredentials],
        probe: CallbackProbe | None = None,
    ):
        """Initialize the callback handler.

        Args:
            settings: Application settings (landing URL, authority tenant)
            state_codec: Decodes and verifies the state envelope
            token_client: Redeems authorization codes
            integration_service: Stores the connected integration
            sync_service: Runs the best-effort directory sync
            credentials_resolver: Client registration per provider
            probe: Optional domain probe for observability
        """
        self._settings = settings
        self._state_codec = state_codec
        self._token_client = token_client
        self._integration_service = integration_service
        self._sync_service = sync_service
        self._credentials_resolver = credentials_resolver
        self._probe = probe or DefaultCallbackProbe()

    async def handle(
        self,
        provider: ProviderDescriptor,
        code: str | None,
        state: str | None,
        error: str | None,
    ) -> CallbackResult:
        """Run the callback state machine.

        Args:
            provider: Provider whose callback route was hit
            code: Authorization code
            state: Raw state echoed back by the provider
            error: OAuth error reported by the provider

        Returns:
            CallbackResult with the redirect URL and the stage reached
        """
        self._probe.callback_received(provider.key, state)
        stage = CallbackStage.RECEIVED

        try:
            if error:
                self._probe.provider_error(provider.key, error)
                return self._error(provider, stage, error)

            if not code:
                return self._error(
                    provider, stage, CallbackError.MISSING_AUTHORIZATION_CODE
                )

            oauth_state = self._decode_state(provider, state)
            verifier = oauth_state.code_verifier if oauth_state else None
            if provider.requires_pkce and not verifier:
                return self._error(provider, stage, CallbackError.MISSING_CODE_VERIFIER)
            stage = CallbackStage.VALIDATED

            assert provider.token_url is not None
            try:
                tokens = await self._token_client.exchange_code(
                    provider=provider,
                    token_url=resolve_endpoint(provider.token_url, self._settings),
                    credentials=self._credentials_resolver(provider),
                    code=code,
                    code_verifier=verifier,
                )
            except TokenExchangeError:
                return self._error(provider, stage, CallbackError.TOKEN_EXCHANGE_FAILED)
            stage = CallbackStage.TOKEN_EXCHANGED

            name = (
                oauth_state.integration_name if oauth_state else None
            ) or provider.display_name
            try:
                integration = await self._integration_service.create_connected(
                    name=name,
                    type=provider.integration_type,
                    config=provider_config(provider, self._settings),
                    auth_data=tokens.to_auth_data(datetime.now(UTC)),
                )
            except IntegrationCreationError:
                return self._error(
                    provider, stage, CallbackError.INTEGRATION_CREATION_FAILED
                )
            stage = CallbackStage.INTEGRATION_PERSISTED

            outcome: SyncOutcome | None = None
            try:
                outcome = await self._sync_service.run(
                    provider, integration.id, tokens.access_token
                )
                stage = CallbackStage.SYNCED
            except Exception as e:
                # Best effort: the connection itself already succeeded
                self._probe.sync_crashed(provider.key, integration.id.value, str(e))

            self._probe.callback_completed(
                provider.key, integration.id.value, integration.name
            )
            return CallbackResult(
                stage=CallbackStage.REDIRECTED,
                reached=stage,
                redirect_url=build_landing_redirect(
                    self._settings.landing_url,
                    {"success": "true", "integration": integration.name},
                ),
                integration_id=integration.id.value,
                integration_name=integration.name,
                sync=outcome,
            )

        except Exception as e:
            self._probe.callback_failed(provider.key, stage.value, str(e))
            return self._error(provider, stage, CallbackError.CALLBACK_ERROR)

    def _decode_state(
        self, provider: ProviderDescriptor, state: str | None
    ) -> OAuthState | None:
        """Unparseable or forged state is treated as absent."""
        if not state:
            return None
        try:
            return self._state_codec.decode(state)
        except InvalidStateError as e:
            self._probe.state_invalid(provider.key, str(e))
            return None

    def _error(
        self, provider: ProviderDescriptor, reached: CallbackStage, code: str
    ) -> CallbackResult:
        code = str(code)
        self._probe.callback_rejected(provider.key, code)
        return CallbackResult(
            stage=CallbackStage.ERROR_REDIRECTED,
            reached=reached,
            redirect_url=build_landing_redirect(
                self._settings.landing_url, {"error": code}
            ),
            error=code,
        )
