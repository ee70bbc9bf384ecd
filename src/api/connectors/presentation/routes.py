"""HTTP routes for connecting integrations.

``/api/{provider}/callback`` is the redirect URI registered with each
provider. It always answers with a 302 to the landing page.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import RedirectResponse

from connectors.application.services import (
    AuthorizationService,
    CsvFormatError,
    CsvImportService,
    OAuthCallbackService,
)
from connectors.dependencies import (
    CredentialsResolver,
    get_authorization_service,
    get_callback_service,
    get_credentials_resolver,
    get_csv_import_service,
)
from connectors.infrastructure.providers import (
    ProviderDescriptor,
    get_provider,
    get_provider_for_type,
)
from connectors.ports.exceptions import (
    ProviderNotConfiguredError,
    UnsupportedProviderError,
)
from connectors.presentation.models import (
    AuthorizationUrlResponse,
    ConnectIntegrationRequest,
    CsvImportResponse,
)
from directory.ports.exceptions import IntegrationCreationError

oauth_router = APIRouter(prefix="/api", tags=["oauth"])

integrations_router = APIRouter(prefix="/integrations", tags=["integrations"])


def _oauth_provider(provider: str) -> ProviderDescriptor:
    try:
        descriptor = get_provider(provider)
    except UnsupportedProviderError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown provider: {provider}",
        )
    if not descriptor.supports_oauth:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{descriptor.display_name} has no OAuth flow",
        )
    return descriptor


def _authorization_url(
    service: AuthorizationService,
    resolve_credentials: CredentialsResolver,
    descriptor: ProviderDescriptor,
    integration_name: str,
) -> str:
    try:
        credentials = resolve_credentials(descriptor)
        return service.build_authorization_url(
            descriptor, credentials, integration_name
        ).url
    except UnsupportedProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except ProviderNotConfiguredError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        )


@oauth_router.get("/{provider}/authorize")
async def authorize(
    provider: str,
    service: Annotated[AuthorizationService, Depends(get_authorization_service)],
    resolve_credentials: Annotated[
        CredentialsResolver, Depends(get_credentials_resolver)
    ],
    integration_name: str = Query(..., min_length=1, max_length=255),
) -> RedirectResponse:
    """Start the OAuth flow by redirecting to the provider's consent page."""
    descriptor = _oauth_provider(provider)
    url = _authorization_url(service, resolve_credentials, descriptor, integration_name)
    return RedirectResponse(url=url)


@oauth_router.get("/{provider}/callback")
async def oauth_callback(
    provider: str,
    service: Annotated[OAuthCallbackService, Depends(get_callback_service)],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    """Handle the provider redirect.

    Exchanges the code, stores the integration, runs the directory sync
    and redirects to the landing page with the outcome.
    """
    descriptor = _oauth_provider(provider)
    result = await service.handle(descriptor, code=code, state=state, error=error)
    return RedirectResponse(url=result.redirect_url, status_code=status.HTTP_302_FOUND)


@integrations_router.post("/connect")
async def connect_integration(
    request: ConnectIntegrationRequest,
    service: Annotated[AuthorizationService, Depends(get_authorization_service)],
    resolve_credentials: Annotated[
        CredentialsResolver, Depends(get_credentials_resolver)
    ],
) -> AuthorizationUrlResponse:
    """Return the authorization URL for a new OAuth integration.

    Raises:
        HTTPException: 400 for CSV, which has no OAuth flow
        HTTPException: 503 if the provider's credentials are not configured
    """
    descriptor = get_provider_for_type(request.integration_type)
    url = _authorization_url(
        service, resolve_credentials, descriptor, request.integration_name
    )
    return AuthorizationUrlResponse(authorization_url=url)


@integrations_router.post("/csv", status_code=status.HTTP_201_CREATED)
async def import_csv(
    request: Request,
    service: Annotated[CsvImportService, Depends(get_csv_import_service)],
    integration_name: str | None = Query(None, max_length=255),
) -> CsvImportResponse:
    """Create a CSV integration from a ``text/csv`` body and merge its rows.

    Raises:
        HTTPException: 400 if the body is not UTF-8 CSV with a header row
        HTTPException: 500 if the integration cannot be stored
    """
    try:
        content = (await request.body()).decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="CSV upload must be UTF-8 encoded",
        )

    try:
        result = await service.import_csv(content, integration_name=integration_name)
    except CsvFormatError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except IntegrationCreationError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create integration",
        )

    return CsvImportResponse(
        integration_id=result.integration.id.value,
        integration_name=result.integration.name,
        rows=result.employees.fetched,
        skipped_rows=result.skipped_rows,
        inserted=result.employees.inserted,
        updated=result.employees.updated,
        persist_error=result.employees.persist_error,
    )
