"""
Domain exceptions for the stock opname service.

Every error raised by the core derives from StockOpnameError and is surfaced
to the caller as-is; nothing in the core retries.
"""

from typing import Any


class StockOpnameError(Exception):
    """Base exception for all stock opname errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Lookup Exceptions
class NotFoundError(StockOpnameError):
    """Referenced entity does not exist."""


class LocationNotFoundError(NotFoundError):
    """Location not found."""

    def __init__(self, location_id: int):
        super().__init__(
            f"Location not found: {location_id}",
            code="LOCATION_NOT_FOUND",
            details={"location_id": location_id},
        )


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, user_id: int):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class SessionNotFoundError(NotFoundError):
    """Stock opname session not found."""

    def __init__(self, session_id: int):
        super().__init__(
            f"Stock opname session not found: {session_id}",
            code="SESSION_NOT_FOUND",
            details={"session_id": session_id},
        )


# State Exceptions
class InvalidStateError(StockOpnameError):
    """Operation not allowed in the entity's current state."""


class SessionNotActiveError(InvalidStateError):
    """Items can only be appended to an active session."""

    def __init__(self, session_id: int, status: str):
        super().__init__(
            f"Cannot add items to inactive session {session_id} (status: {status})",
            code="SESSION_NOT_ACTIVE",
            details={"session_id": session_id, "status": status},
        )


# Validation Exceptions
class ValidationError(StockOpnameError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Storage Exceptions
class StorageError(StockOpnameError):
    """Base exception for storage operations."""


class ConstraintViolationError(StorageError):
    """Uniqueness or referential constraint rejected by the database."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Constraint violation during {operation}: {error}",
            code="CONSTRAINT_VIOLATION",
            details={"operation": operation, "error": error},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Auth Exceptions
class AuthError(StockOpnameError):
    """Base exception for authentication failures."""


class InvalidCredentialsError(AuthError):
    """Username or password rejected.

    Unknown usernames and wrong passwords produce the same error.
    """

    def __init__(self) -> None:
        super().__init__(
            "Invalid username or password",
            code="INVALID_CREDENTIALS",
        )
