"""Unit tests for the OAuth callback state machine."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock, create_autospec
from urllib.parse import parse_qs, urlsplit

import pytest

from connectors.application.services.callback_service import (
    OAuthCallbackService,
    build_landing_redirect,
)
from connectors.application.services.sync_service import SyncService
from connectors.domain.state import OAuthState, StateCodec
from connectors.domain.value_objects import CallbackStage, TokenSet
from connectors.infrastructure.oauth_client import OAuthTokenClient
from connectors.infrastructure.providers import (
    GOOGLE,
    MICROSOFT,
    ProviderCredentials,
)
from connectors.ports.exceptions import TokenExchangeError
from directory.application.services import IntegrationService
from directory.domain.aggregates import Integration
from directory.domain.value_objects import IntegrationType
from directory.ports.exceptions import IntegrationCreationError


def _query(url: str) -> dict[str, str]:
    return {k: v[0] for k, v in parse_qs(urlsplit(url).query).items()}


@pytest.fixture
def state_codec() -> StateCodec:
    return StateCodec()


@pytest.fixture
def valid_state(state_codec) -> str:
    return state_codec.encode(
        OAuthState(
            integration_type=GOOGLE.integration_type.value,
            integration_name="Acme Workspace",
            code_verifier="v" * 64,
        )
    )


@pytest.fixture
def token_client():
    client = create_autospec(OAuthTokenClient, instance=True)
    client.exchange_code = AsyncMock(
        return_value=TokenSet.from_response(
            {"access_token": "abc", "expires_in": 3600, "refresh_token": "r"}
        )
    )
    return client


@pytest.fixture
def integration_service():
    service = create_autospec(IntegrationService, instance=True)

    async def create_connected(name, type, config=None, auth_data=None, created_by=None):
        return Integration.connect(
            name=name, type=type, config=config, auth_data=auth_data
        )

    service.create_connected = AsyncMock(side_effect=create_connected)
    return service


@pytest.fixture
def sync_service():
    service = create_autospec(SyncService, instance=True)
    service.run = AsyncMock(return_value=None)
    return service


@pytest.fixture
def credentials_resolver():
    return MagicMock(
        return_value=ProviderCredentials(
            client_id="cid", client_secret="sec", redirect_uri="https://r"
        )
    )


@pytest.fixture
def callback_service(
    settings,
    state_codec,
    token_client,
    integration_service,
    sync_service,
    credentials_resolver,
):
    return OAuthCallbackService(
        settings=settings,
        state_codec=state_codec,
        token_client=token_client,
        integration_service=integration_service,
        sync_service=sync_service,
        credentials_resolver=credentials_resolver,
        probe=MagicMock(),
    )


class TestLandingRedirect:
    def test_spaces_are_percent_encoded(self):
        url = build_landing_redirect("/", {"success": "true", "integration": "Acme Co"})

        assert url == "/?success=true&integration=Acme%20Co"

    def test_existing_query_is_extended(self):
        url = build_landing_redirect("/app?tab=1", {"error": "x"})

        assert url == "/app?tab=1&error=x"


class TestProviderErrors:
    @pytest.mark.asyncio
    async def test_provider_error_is_forwarded_without_token_call(
        self, callback_service, token_client, valid_state
    ):
        result = await callback_service.handle(
            GOOGLE, code=None, state=valid_state, error="access_denied"
        )

        assert _query(result.redirect_url) == {"error": "access_denied"}
        assert result.stage is CallbackStage.ERROR_REDIRECTED
        token_client.exchange_code.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_code(self, callback_service, token_client, valid_state):
        result = await callback_service.handle(
            GOOGLE, code=None, state=valid_state, error=None
        )

        assert result.error == "missing_authorization_code"
        token_client.exchange_code.assert_not_called()


class TestStateValidation:
    @pytest.mark.asyncio
    async def test_missing_state_means_missing_verifier(
        self, callback_service, token_client
    ):
        result = await callback_service.handle(
            GOOGLE, code="c", state=None, error=None
        )

        assert result.error == "missing_code_verifier"
        token_client.exchange_code.assert_not_called()

    @pytest.mark.asyncio
    async def test_garbage_state_means_missing_verifier(
        self, callback_service, token_client
    ):
        result = await callback_service.handle(
            GOOGLE, code="c", state="not-json{", error=None
        )

        assert result.error == "missing_code_verifier"
        assert result.reached is CallbackStage.RECEIVED
        token_client.exchange_code.assert_not_called()


class TestTokenExchange:
    @pytest.mark.asyncio
    async def test_token_failure_redirects_without_integration(
        self, callback_service, token_client, integration_service, valid_state
    ):
        token_client.exchange_code.side_effect = TokenExchangeError(
            "bad", error="invalid_grant", status_code=400
        )

        result = await callback_service.handle(
            GOOGLE, code="c", state=valid_state, error=None
        )

        assert result.error == "token_exchange_failed"
        assert result.reached is CallbackStage.VALIDATED
        integration_service.create_connected.assert_not_called()

    @pytest.mark.asyncio
    async def test_verifier_from_state_is_sent(
        self, callback_service, token_client, valid_state
    ):
        await callback_service.handle(GOOGLE, code="c", state=valid_state, error=None)

        kwargs = token_client.exchange_code.call_args.kwargs
        assert kwargs["code"] == "c"
        assert kwargs["code_verifier"] == "v" * 64
        assert kwargs["token_url"] == GOOGLE.token_url

    @pytest.mark.asyncio
    async def test_microsoft_token_url_uses_configured_tenant(
        self, callback_service, token_client, state_codec, settings
    ):
        state = state_codec.encode(
            OAuthState(
                integration_type=MICROSOFT.integration_type.value,
                integration_name="Entra",
                code_verifier="w" * 64,
            )
        )

        await callback_service.handle(MICROSOFT, code="c", state=state, error=None)

        token_url = token_client.exchange_code.call_args.kwargs["token_url"]
        assert token_url == (
            f"https://login.microsoftonline.com/{settings.microsoft.tenant}"
            "/oauth2/v2.0/token"
        )


class TestIntegrationPersistence:
    @pytest.mark.asyncio
    async def test_success_stores_tokens_and_redirects(
        self, callback_service, integration_service, sync_service, valid_state
    ):
        before = datetime.now(UTC)

        result = await callback_service.handle(
            GOOGLE, code="c", state=valid_state, error=None
        )

        assert _query(result.redirect_url) == {
            "success": "true",
            "integration": "Acme Workspace",
        }
        assert "Acme%20Workspace" in result.redirect_url
        kwargs = integration_service.create_connected.call_args.kwargs
        assert kwargs["name"] == "Acme Workspace"
        assert kwargs["type"] is IntegrationType.GOOGLE_WORKSPACE
        auth_data = kwargs["auth_data"]
        assert auth_data["access_token"] == "abc"
        assert auth_data["refresh_token"] == "r"
        expires_at = datetime.fromisoformat(auth_data["expires_at"])
        expected = before + timedelta(seconds=3600)
        assert abs((expires_at - expected).total_seconds()) <= 1
        sync_service.run.assert_awaited_once()
        assert result.stage is CallbackStage.REDIRECTED
        assert result.reached is CallbackStage.SYNCED

    @pytest.mark.asyncio
    async def test_creation_failure(
        self, callback_service, integration_service, sync_service, valid_state
    ):
        integration_service.create_connected.side_effect = IntegrationCreationError(
            "duplicate"
        )

        result = await callback_service.handle(
            GOOGLE, code="c", state=valid_state, error=None
        )

        assert result.error == "integration_creation_failed"
        sync_service.run.assert_not_called()

    @pytest.mark.asyncio
    async def test_sync_crash_still_reports_success(
        self, callback_service, sync_service, valid_state
    ):
        sync_service.run.side_effect = RuntimeError("directory API exploded")

        result = await callback_service.handle(
            GOOGLE, code="c", state=valid_state, error=None
        )

        assert result.succeeded
        assert _query(result.redirect_url)["success"] == "true"
        assert result.reached is CallbackStage.INTEGRATION_PERSISTED

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_callback_error(
        self, callback_service, credentials_resolver, valid_state
    ):
        credentials_resolver.side_effect = RuntimeError("settings broke")

        result = await callback_service.handle(
            GOOGLE, code="c", state=valid_state, error=None
        )

        assert result.error == "callback_error"
        assert _query(result.redirect_url) == {"error": "callback_error"}
