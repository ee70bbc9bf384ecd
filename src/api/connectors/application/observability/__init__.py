"""Domain-Oriented Observability for the connectors application layer."""

from connectors.application.observability.callback_probe import (
    CallbackProbe,
    DefaultCallbackProbe,
)
from connectors.application.observability.sync_probe import (
    DefaultSyncProbe,
    SyncProbe,
)

__all__ = [
    "CallbackProbe",
    "DefaultCallbackProbe",
    "DefaultSyncProbe",
    "SyncProbe",
]
