from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class UnauthorizedError(UserError):
    """Raised when an operation requires a valid session and there is none."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class InvalidTokenError(UserError):
    """Raised when a session token is malformed, tampered with or expired."""

    def __init__(self, message: str = "Token decryption failed") -> None:
        super().__init__(message)


class DuplicateUserError(UserError):
    """Raised when registering an email that already exists."""

    def __init__(self, message: str = "User already exists") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class StoreFailureError(Exception):
    """Raised when the underlying database operation fails.

    Not a UserError: the driver message may leak storage details.
    """
