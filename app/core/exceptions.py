"""Domain exceptions mapped to HTTP responses by the application handlers."""

from fastapi import status


class AccountError(Exception):
    """Base error for account directory operations."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An internal server error occurred."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(AccountError):
    """Target record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Document not found."


class ConflictError(AccountError):
    """A unique field is already taken by another record."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict."


class PasswordHashError(AccountError):
    """The hashing collaborator failed to produce a hash."""


USERNAME_IN_USE = "Username already in use."
EMAIL_IN_USE = "Email already in use."
