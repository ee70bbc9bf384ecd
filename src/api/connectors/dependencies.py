"""FastAPI dependency providers for the connectors bounded context."""

from __future__ import annotations

from typing import Annotated, Callable

import httpx
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from connectors.application.observability import (
    CallbackProbe,
    DefaultCallbackProbe,
    DefaultSyncProbe,
    SyncProbe,
)
from connectors.application.services import (
    AuthorizationService,
    CsvImportService,
    OAuthCallbackService,
    SyncService,
)
from connectors.domain.state import StateCodec
from connectors.infrastructure.directory_client import DirectoryClient
from connectors.infrastructure.oauth_client import OAuthTokenClient
from connectors.infrastructure.providers import (
    ProviderCredentials,
    ProviderDescriptor,
    credentials_for,
)
from directory.application.services import IntegrationService
from directory.dependencies.employee import get_employee_repository
from directory.dependencies.group import get_group_repository
from directory.dependencies.integration import get_integration_service
from directory.infrastructure.employee_repository import EmployeeRepository
from directory.infrastructure.group_repository import GroupRepository
from infrastructure.database.dependencies import get_session
from infrastructure.dependencies import get_http_client
from infrastructure.settings import Settings, get_settings

CredentialsResolver = Callable[[ProviderDescriptor], ProviderCredentials]


def get_settings_dep() -> Settings:
    """Dependency for application settings."""
    return get_settings()


def get_callback_probe() -> CallbackProbe:
    """Dependency for the OAuth flow probe."""
    return DefaultCallbackProbe()


def get_sync_probe() -> SyncProbe:
    """Dependency for the sync pipeline probe."""
    return DefaultSyncProbe()


def get_state_codec(
    settings: Annotated[Settings, Depends(get_settings_dep)],
) -> StateCodec:
    """State codec, signing only when DIRSYNC_STATE_SIGNING_KEY is set."""
    key = settings.state_signing_key
    return StateCodec(signing_key=key.get_secret_value() if key else None)


def get_credentials_resolver(
    settings: Annotated[Settings, Depends(get_settings_dep)],
) -> CredentialsResolver:
    """Resolves provider client credentials from settings."""

    def resolve(provider: ProviderDescriptor) -> ProviderCredentials:
        return credentials_for(provider, settings)

    return resolve


def get_token_client(
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> OAuthTokenClient:
    return OAuthTokenClient(http_client)


def get_directory_client(
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> DirectoryClient:
    return DirectoryClient(http_client)


def get_sync_service(
    directory_client: Annotated[DirectoryClient, Depends(get_directory_client)],
    employee_repo: Annotated[EmployeeRepository, Depends(get_employee_repository)],
    group_repo: Annotated[GroupRepository, Depends(get_group_repository)],
    integration_service: Annotated[
        IntegrationService, Depends(get_integration_service)
    ],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[SyncProbe, Depends(get_sync_probe)],
) -> SyncService:
    """Get SyncService instance.

    Repositories and the integration service share the request session
    via FastAPI dependency caching.
    """
    return SyncService(
        directory_client=directory_client,
        employee_repository=employee_repo,
        group_repository=group_repo,
        integration_service=integration_service,
        session=session,
        probe=probe,
    )


def get_authorization_service(
    settings: Annotated[Settings, Depends(get_settings_dep)],
    state_codec: Annotated[StateCodec, Depends(get_state_codec)],
    probe: Annotated[CallbackProbe, Depends(get_callback_probe)],
) -> AuthorizationService:
    return AuthorizationService(settings=settings, state_codec=state_codec, probe=probe)


def get_callback_service(
    settings: Annotated[Settings, Depends(get_settings_dep)],
    state_codec: Annotated[StateCodec, Depends(get_state_codec)],
    token_client: Annotated[OAuthTokenClient, Depends(get_token_client)],
    integration_service: Annotated[
        IntegrationService, Depends(get_integration_service)
    ],
    sync_service: Annotated[SyncService, Depends(get_sync_service)],
    credentials_resolver: Annotated[
        CredentialsResolver, Depends(get_credentials_resolver)
    ],
    probe: Annotated[CallbackProbe, Depends(get_callback_probe)],
) -> OAuthCallbackService:
    """Get OAuthCallbackService instance."""
    return OAuthCallbackService(
        settings=settings,
        state_codec=state_codec,
        token_client=token_client,
        integration_service=integration_service,
        sync_service=sync_service,
        credentials_resolver=credentials_resolver,
        probe=probe,
    )


def get_csv_import_service(
    integration_service: Annotated[
        IntegrationService, Depends(get_integration_service)
    ],
    sync_service: Annotated[SyncService, Depends(get_sync_service)],
    probe: Annotated[SyncProbe, Depends(get_sync_probe)],
) -> CsvImportService:
    return CsvImportService(
        integration_service=integration_service,
        sync_service=sync_service,
        probe=probe,
    )
