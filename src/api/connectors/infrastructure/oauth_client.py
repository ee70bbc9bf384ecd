"""Token endpoint client for the authorization-code grant.

One form-encoded POST per callback. There is no retry: authorization
codes are single use.
"""

from __future__ import annotations

import httpx

from connectors.domain.value_objects import TokenSet
from connectors.infrastructure.observability import (
    DefaultOAuthClientProbe,
    OAuthClientProbe,
)
from connectors.infrastructure.providers import ProviderCredentials, ProviderDescriptor
from connectors.ports.exceptions import TokenExchangeError


class OAuthTokenClient:
    """Exchanges authorization codes for tokens."""

    def __init__(
        self, http_client: httpx.AsyncClient, probe: OAuthClientProbe | None = None
    ):
        self._http = http_client
        self._probe = probe or DefaultOAuthClientProbe()

    async def exchange_code(
        self,
        provider: ProviderDescriptor,
        token_url: str,
        credentials: ProviderCredentials,
        code: str,
        code_verifier: str | None,
    ) -> TokenSet:
        """Redeem an authorization code.

        Args:
            provider: Provider descriptor (decides secret and scope fields)
            token_url: Resolved token endpoint
            credentials: Client registration
            code: Authorization code from the callback
            code_verifier: PKCE verifier recovered from state

        Returns:
            TokenSet parsed from the response

        Raises:
            TokenExchangeError: On transport failure, non-2xx status, or a
                body without an access token
        """
        form = {
            "client_id": credentials.client_id,
            "code": code,
            "redirect_uri": credentials.redirect_uri,
            "grant_type": "authorization_code",
        }
        if provider.confidential and credentials.client_secret:
            form["client_secret"] = credentials.client_secret
        if provider.scope_in_token_request:
            form["scope"] = provider.scope
        if code_verifier:
            form["code_verifier"] = code_verifier

        self._probe.token_exchange_started(provider.key, token_url)
        try:
            response = await self._http.post(
                token_url,
                data=form,
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            self._probe.token_exchange_rejected(provider.key, None, None, str(e))
            raise TokenExchangeError(f"Token endpoint unreachable: {e}") from e

        if not response.is_success:
            error, description = _parse_error(response)
            self._probe.token_exchange_rejected(
                provider.key, response.status_code, error, description
            )
            raise TokenExchangeError(
                f"Token exchange failed with status {response.status_code}",
                error=error,
                description=description,
                status_code=response.status_code,
            )

        try:
            tokens = TokenSet.from_response(response.json())
        except ValueError as e:
            self._probe.token_exchange_rejected(
                provider.key, response.status_code, None, str(e)
            )
            raise TokenExchangeError(
                f"Invalid token response: {e}", status_code=response.status_code
            ) from e

        self._probe.token_exchange_succeeded(provider.key, tokens.expires_in)
        return tokens


def _parse_error(response: httpx.Response) -> tuple[str | None, str | None]:
    """Extract RFC 6749 ``error``/``error_description`` when the body is JSON."""
    try:
        body = response.json()
    except ValueError:
        return None, None
    if not isinstance(body, dict):
        return None, None
    error = body.get("error")
    description = body.get("error_description")
    return (
        error if isinstance(error, str) else None,
        description if isinstance(description, str) else None,
    )
