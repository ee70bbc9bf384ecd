"""Value objects for the connectors domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any


class CallbackStage(StrEnum):
    """Stages of the OAuth callback state machine."""

    RECEIVED = "received"
    VALIDATED = "validated"
    TOKEN_EXCHANGED = "token_exchanged"
    INTEGRATION_PERSISTED = "integration_persisted"
    SYNCED = "synced"
    REDIRECTED = "redirected"
    ERROR_REDIRECTED = "error_redirected"


class CallbackError(StrEnum):
    """Machine-readable error codes put in the callback redirect."""

    MISSING_AUTHORIZATION_CODE = "missing_authorization_code"
    MISSING_CODE_VERIFIER = "missing_code_verifier"
    TOKEN_EXCHANGE_FAILED = "token_exchange_failed"
    INTEGRATION_CREATION_FAILED = "integration_creation_failed"
    CALLBACK_ERROR = "callback_error"


@dataclass(frozen=True)
class TokenSet:
    """Token endpoint response.

    ``raw`` keeps the full JSON body: auth_data is provider specific and
    stored as received, plus the computed expiry.
    """

    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None
    refresh_token: str | None = None
    scope: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, body: Any) -> TokenSet:
        """Build from a token endpoint JSON body.

        Raises:
            ValueError: If the body is not an object or access_token is missing
        """
        if not isinstance(body, dict):
            raise ValueError("Token response is not a JSON object")
        access_token = body.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise ValueError("Token response has no access_token")

        expires_in = body.get("expires_in")
        return cls(
            access_token=access_token,
            token_type=body.get("token_type") or "Bearer",
            expires_in=int(expires_in) if expires_in is not None else None,
            refresh_token=body.get("refresh_token"),
            scope=body.get("scope"),
            raw=dict(body),
        )

    def expires_at(self, issued_at: datetime) -> datetime | None:
        if self.expires_in is None:
            return None
        return issued_at + timedelta(seconds=self.expires_in)

    def to_auth_data(self, issued_at: datetime) -> dict[str, Any]:
        """auth_data stored on the Integration."""
        expires_at = self.expires_at(issued_at)
        return {
            **self.raw,
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "token_type": self.token_type,
            "expires_in": self.expires_in,
            "expires_at": expires_at.isoformat() if expires_at else None,
        }


@dataclass
class ResourceSyncResult:
    """Outcome of syncing one resource type (users or groups)."""

    resource: str
    fetched: int = 0
    pages: int = 0
    inserted: int = 0
    updated: int = 0
    fetch_error: str | None = None
    persist_error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.fetch_error is None and self.persist_error is None


@dataclass(frozen=True)
class SyncOutcome:
    """Structured result of one sync pass."""

    users: ResourceSyncResult
    groups: ResourceSyncResult
    completed_at: datetime

    @property
    def succeeded(self) -> bool:
        return self.users.succeeded and self.groups.succeeded


@dataclass(frozen=True)
class CallbackResult:
    """Where the callback ended and where to send the browser.

    ``stage`` is the terminal stage; ``reached`` is the last stage completed
    before it, which tells where an error redirect came from.
    """

    stage: CallbackStage
    redirect_url: str
    reached: CallbackStage = CallbackStage.RECEIVED
    error: str | None = None
    integration_id: str | None = None
    integration_name: str | None = None
    sync: SyncOutcome | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
