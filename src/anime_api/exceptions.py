"""Typed failures raised by services and the authorization policy.

Every failure carries an ErrorKind and a fixed message. Nothing between the
raising layer and the exception handlers in error_handlers.py catches them;
the handlers translate them into the canonical error body.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    NOT_FOUND = "NOT_FOUND"
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"


class DomainError(Exception):
    """Base class for all typed failures."""

    kind: ErrorKind = ErrorKind.BAD_REQUEST

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested anime does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Anime not found") -> None:
        super().__init__(message)


class InvalidNameError(DomainError):
    """Raised when an anime name is empty at persist or update time."""

    kind = ErrorKind.BAD_REQUEST

    def __init__(self, message: str = "Invalid Name") -> None:
        super().__init__(message)


class UnauthenticatedError(DomainError):
    """No identity presented, or the presented credential did not verify."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class ForbiddenError(DomainError):
    """Authenticated identity lacks the role the matched rule requires."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str = "Access Denied") -> None:
        super().__init__(message)


class ConflictError(DomainError):
    """Raised when an operation conflicts with existing state (e.g. duplicate)."""

    kind = ErrorKind.CONFLICT


class UsernameTakenError(ConflictError):
    """Raised when provisioning a username that already exists."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"Username {username} is already taken")
