"""
Arsip Server - Exceptions

Exception hierarchy raised by the service modules. Each class carries the
HTTP status code it maps to; server.py registers one handler for the base
class that turns any of them into a JSON error response.
"""


class ArsipError(Exception):
    """Base exception for all archive errors."""
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class UnauthenticatedError(ArsipError):
    """No session token was presented."""
    status_code = 401


class InvalidCredentialsError(UnauthenticatedError):
    """Username unknown or password mismatch."""
    pass


class ForbiddenError(ArsipError):
    """Token rejected or role check failed."""
    status_code = 403


class NotFoundError(ArsipError):
    """Referenced entity does not exist."""
    status_code = 404


class InvalidInputError(ArsipError):
    """Malformed id, missing field or unknown enum value."""
    status_code = 400


class InvalidTransitionError(InvalidInputError):
    """Requested status change is not allowed by the letter lifecycle."""
    pass


class SelfDeletionError(InvalidInputError):
    """An administrator tried to delete their own account."""
    pass


class ConstraintViolationError(ArsipError):
    """Uniqueness or foreign key constraint rejected a write."""
    status_code = 400


class DuplicateNumberError(ConstraintViolationError):
    pass


class DuplicateUsernameError(ConstraintViolationError):
    pass
