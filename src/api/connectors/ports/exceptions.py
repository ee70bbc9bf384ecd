"""Exceptions for provider communication in the connectors context."""

from __future__ import annotations


class UnsupportedProviderError(ValueError):
    """Raised when a provider has no OAuth flow (CSV) or is unknown."""


class ProviderNotConfiguredError(RuntimeError):
    """Raised when a provider's client credentials are not set."""


class TokenExchangeError(Exception):
    """Raised when the token endpoint rejects the authorization code.

    ``error`` and ``description`` carry the provider's structured error
    when its body was parseable; ``status_code`` is None on transport
    failures.
    """

    def __init__(
        self,
        message: str,
        error: str | None = None,
        description: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.error = error
        self.description = description
        self.status_code = status_code


class DirectoryFetchError(Exception):
    """Raised when a directory page cannot be fetched."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
