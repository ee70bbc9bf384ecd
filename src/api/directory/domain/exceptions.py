"""Domain validation errors for the directory context."""


class InvalidEmployeeError(ValueError):
    """Raised when an employee is missing required fields or carries bad values."""


class InvalidGroupError(ValueError):
    """Raised when a group is missing its name."""
