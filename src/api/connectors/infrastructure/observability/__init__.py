"""Domain-Oriented Observability for connectors infrastructure."""

from connectors.infrastructure.observability.client_probes import (
    DefaultDirectoryClientProbe,
    DefaultOAuthClientProbe,
    DirectoryClientProbe,
    OAuthClientProbe,
)

__all__ = [
    "DefaultDirectoryClientProbe",
    "DefaultOAuthClientProbe",
    "DirectoryClientProbe",
    "OAuthClientProbe",
]
