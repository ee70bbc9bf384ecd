"""Provider descriptors.

One descriptor per provider variant bundles everything that differs
between providers: OAuth endpoints, scopes, directory endpoints, page
sizes, pagination style and normalizers. The callback handler, the sync
pipeline and the authorization URL builder are written once against
this shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Callable, Mapping

from connectors.domain.normalization import (
    normalize_csv_row,
    normalize_google_group,
    normalize_google_user,
    normalize_microsoft_group,
    normalize_microsoft_user,
)
from connectors.ports.exceptions import (
    ProviderNotConfiguredError,
    UnsupportedProviderError,
)
from directory.domain.records import EmployeeRecord, GroupRecord
from directory.domain.value_objects import IntegrationType
from infrastructure.settings import Settings


class PaginationStyle(StrEnum):
    """How a directory API points at its next page."""

    # Opaque token echoed back as a query parameter (Google)
    PAGE_TOKEN = "page_token"
    # Absolute URL to GET verbatim (Microsoft Graph @odata.nextLink)
    NEXT_LINK = "next_link"


@dataclass(frozen=True)
class DirectoryEndpoint:
    """A paginated directory list endpoint."""

    url: str
    items_key: str
    params: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ProviderDescriptor:
    """Static description of an identity provider variant."""

    key: str
    integration_type: IntegrationType
    display_name: str
    authorize_url: str | None = None
    token_url: str | None = None
    scopes: tuple[str, ...] = ()
    config_scope: str | None = None
    authorize_params: Mapping[str, str] = field(default_factory=dict)
    scope_in_token_request: bool = False
    confidential: bool = True
    requires_pkce: bool = True
    users: DirectoryEndpoint | None = None
    groups: DirectoryEndpoint | None = None
    pagination: PaginationStyle = PaginationStyle.PAGE_TOKEN
    next_token_key: str = "nextPageToken"
    page_token_param: str = "pageToken"
    normalize_user: Callable[[Mapping[str, Any]], EmployeeRecord | None] | None = None
    normalize_group: Callable[[Mapping[str, Any]], GroupRecord | None] | None = None

    @property
    def supports_oauth(self) -> bool:
        return self.authorize_url is not None and self.token_url is not None

    @property
    def scope(self) -> str:
        return " ".join(self.scopes)


@dataclass(frozen=True)
class ProviderCredentials:
    """OAuth client registration for one provider."""

    client_id: str
    client_secret: str | None
    redirect_uri: str

    @property
    def configured(self) -> bool:
        return bool(self.client_id)


GOOGLE = ProviderDescriptor(
    key="google",
    integration_type=IntegrationType.GOOGLE_WORKSPACE,
    display_name="Google Workspace",
    authorize_url="https://accounts.google.com/o/oauth2/v2/auth",
    token_url="https://oauth2.googleapis.com/token",
    scopes=(
        "https://www.googleapis.com/auth/admin.directory.user.readonly",
        "https://www.googleapis.com/auth/admin.directory.group.readonly",
    ),
    config_scope="admin.directory.user.readonly admin.directory.group.readonly",
    # offline + consent makes Google issue a refresh token every time
    authorize_params={"access_type": "offline", "prompt": "consent"},
    users=DirectoryEndpoint(
        url="https://admin.googleapis.com/admin/directory/v1/users",
        items_key="users",
        params={"customer": "my_customer", "maxResults": "500"},
    ),
    groups=DirectoryEndpoint(
        url="https://admin.googleapis.com/admin/directory/v1/groups",
        items_key="groups",
        params={"customer": "my_customer", "maxResults": "200"},
    ),
    pagination=PaginationStyle.PAGE_TOKEN,
    normalize_user=normalize_google_user,
    normalize_group=normalize_google_group,
)

_MICROSOFT_USER_FIELDS = ",".join(
    (
        "id",
        "givenName",
        "surname",
        "mail",
        "userPrincipalName",
        "jobTitle",
        "department",
        "mobilePhone",
        "businessPhones",
        "accountEnabled",
    )
)

MICROSOFT = ProviderDescriptor(
    key="microsoft",
    integration_type=IntegrationType.MICROSOFT_ENTRA,
    display_name="Microsoft Entra ID",
    authorize_url="https://login.microsoftonline.com/{tenant}/oauth2/v2.0/authorize",
    token_url="https://login.microsoftonline.com/{tenant}/oauth2/v2.0/token",
    scopes=("User.Read.All", "Group.Read.All"),
    config_scope="User.Read.All Group.Read.All",
    authorize_params={"response_mode": "query"},
    scope_in_token_request=True,
    users=DirectoryEndpoint(
        url="https://graph.microsoft.com/v1.0/users",
        items_key="value",
        params={
            "$top": "999",
            "$select": _MICROSOFT_USER_FIELDS,
            "$expand": "manager($select=mail)",
        },
    ),
    groups=DirectoryEndpoint(
        url="https://graph.microsoft.com/v1.0/groups",
        items_key="value",
        params={"$top": "999", "$select": "id,displayName,description"},
    ),
    pagination=PaginationStyle.NEXT_LINK,
    next_token_key="@odata.nextLink",
    normalize_user=normalize_microsoft_user,
    normalize_group=normalize_microsoft_group,
)

CSV = ProviderDescriptor(
    key="csv",
    integration_type=IntegrationType.CSV,
    display_name="CSV Upload",
    confidential=False,
    requires_pkce=False,
    normalize_user=normalize_csv_row,
)

PROVIDERS: dict[str, ProviderDescriptor] = {
    descriptor.key: descriptor for descriptor in (GOOGLE, MICROSOFT, CSV)
}

_BY_TYPE: dict[IntegrationType, ProviderDescriptor] = {
    descriptor.integration_type: descriptor for descriptor in PROVIDERS.values()
}


def get_provider(key: str) -> ProviderDescriptor:
    """Look up a descriptor by URL key (``google``, ``microsoft``, ``csv``).

    Raises:
        UnsupportedProviderError: If the key is unknown
    """
    try:
        return PROVIDERS[key]
    except KeyError:
        raise UnsupportedProviderError(f"Unknown provider: {key}") from None


def get_provider_for_type(integration_type: IntegrationType | str) -> ProviderDescriptor:
    """Look up a descriptor by integration type.

    Raises:
        UnsupportedProviderError: If the type is unknown
    """
    try:
        return _BY_TYPE[IntegrationType(integration_type)]
    except (KeyError, ValueError):
        raise UnsupportedProviderError(
            f"Unknown integration type: {integration_type}"
        ) from None


def resolve_endpoint(template: str, settings: Settings) -> str:
    """Fill the tenant segment of Microsoft authority URLs."""
    return template.format(tenant=settings.microsoft.tenant)


def credentials_for(
    descriptor: ProviderDescriptor, settings: Settings
) -> ProviderCredentials:
    """Resolve client credentials for an OAuth provider from settings.

    Raises:
        UnsupportedProviderError: For providers without an OAuth flow
        ProviderNotConfiguredError: If no client id is configured
    """
    if descriptor is GOOGLE:
        section = settings.google
    elif descriptor is MICROSOFT:
        section = settings.microsoft
    else:
        raise UnsupportedProviderError(
            f"{descriptor.display_name} has no OAuth flow"
        )

    credentials = ProviderCredentials(
        client_id=section.client_id,
        client_secret=section.client_secret.get_secret_value() or None,
        redirect_uri=(
            section.redirect_uri
            or f"{settings.base_url.rstrip('/')}/api/{descriptor.key}/callback"
        ),
    )
    if not credentials.configured:
        raise ProviderNotConfiguredError(
            f"{descriptor.display_name} client credentials are not configured"
        )
    return credentials


def provider_config(descriptor: ProviderDescriptor, settings: Settings) -> dict[str, Any]:
    """Provider configuration stored on a new Integration."""
    config: dict[str, Any] = {}
    if descriptor.config_scope:
        config["scope"] = descriptor.config_scope
    if descriptor is MICROSOFT:
        config["tenant"] = settings.microsoft.tenant
    return config
