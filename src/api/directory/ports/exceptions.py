"""Persistence exceptions for the directory bounded context.

These exceptions represent errors that can occur during repository
operations. They should be caught and handled by the application layer.
"""


class IntegrationCreationError(Exception):
    """Raised when a new integration row cannot be inserted.

    For the OAuth callback this is terminal: the operator is redirected
    with ``integration_creation_failed``.
    """

    pass


class IntegrationNotFoundError(Exception):
    """Raised when an integration cannot be found."""

    pass


class EmployeeNotFoundError(Exception):
    """Raised when an employee cannot be found."""

    pass
