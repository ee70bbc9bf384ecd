"""Paginated directory API client.

Fetches every page of a provider's users or groups listing with a bearer
token. A failed page (non-2xx, transport error or unparseable body) stops
pagination for that resource; pages already fetched are kept and the
failure is reported alongside them instead of raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

from connectors.infrastructure.observability import (
    DefaultDirectoryClientProbe,
    DirectoryClientProbe,
)
from connectors.infrastructure.providers import (
    DirectoryEndpoint,
    PaginationStyle,
    ProviderDescriptor,
)
from connectors.ports.exceptions import DirectoryFetchError


@dataclass
class FetchResult:
    """Items accumulated from a paginated listing."""

    resource: str
    items: list[dict[str, Any]] = field(default_factory=list)
    pages: int = 0
    error: DirectoryFetchError | None = None

    @property
    def complete(self) -> bool:
        return self.error is None


class DirectoryClient:
    """Reads users and groups from a provider's directory API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        probe: DirectoryClientProbe | None = None,
    ):
        self._http = http_client
        self._probe = probe or DefaultDirectoryClientProbe()

    async def fetch_users(
        self, provider: ProviderDescriptor, access_token: str
    ) -> FetchResult:
        if provider.users is None:
            return FetchResult(resource="users")
        return await self.paginate(provider, provider.users, access_token, "users")

    async def fetch_groups(
        self, provider: ProviderDescriptor, access_token: str
    ) -> FetchResult:
        if provider.groups is None:
            return FetchResult(resource="groups")
        return await self.paginate(provider, provider.groups, access_token, "groups")

    async def paginate(
        self,
        provider: ProviderDescriptor,
        endpoint: DirectoryEndpoint,
        access_token: str,
        resource: str,
    ) -> FetchResult:
        """Follow the provider's pagination until it is exhausted.

        Page-token providers repeat the base request with the token added;
        next-link providers GET the returned absolute URL verbatim.
        """
        result = FetchResult(resource=resource)
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        }
        url = endpoint.url
        params: dict[str, str] | None = dict(endpoint.params)

        while True:
            page = result.pages + 1
            try:
                body = await self._get_page(url, params, headers)
            except DirectoryFetchError as e:
                self._probe.page_failed(resource, page, e.status_code, str(e))
                result.error = e
                break

            items = body.get(endpoint.items_key) or []
            result.items.extend(item for item in items if isinstance(item, dict))
            result.pages = page
            self._probe.page_fetched(resource, page, len(items))

            next_value = body.get(provider.next_token_key)
            if not next_value:
                break

            if provider.pagination is PaginationStyle.NEXT_LINK:
                url, params = next_value, None
            else:
                params = {
                    **endpoint.params,
                    provider.page_token_param: next_value,
                }

        self._probe.fetch_completed(resource, result.pages, len(result.items))
        return result

    async def _get_page(
        self,
        url: str,
        params: dict[str, str] | None,
        headers: dict[str, str],
    ) -> dict[str, Any]:
        try:
            response = await self._http.get(url, params=params, headers=headers)
        except httpx.HTTPError as e:
            raise DirectoryFetchError(f"Request failed: {e}") from e

        if not response.is_success:
            raise DirectoryFetchError(
                f"Directory API returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise DirectoryFetchError(
                f"Invalid JSON body: {e}", status_code=response.status_code
            ) from e
        if not isinstance(body, dict):
            raise DirectoryFetchError(
                "Directory API body is not an object",
                status_code=response.status_code,
            )
        return body
