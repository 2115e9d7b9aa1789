"""Domain errors raised by services and translated by the HTTP layer."""


class NotFoundError(LookupError):
    """No record exists for the requested id."""


class ValidationError(ValueError):
    """Input failed a domain rule; the message names the rule."""


class ConflictError(ValueError):
    """A unique field (username, email) is already in use."""


class InvalidCredentialsError(Exception):
    """Login failed. The message never says which credential was wrong."""

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)
