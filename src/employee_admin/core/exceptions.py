from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidPermissionsError(ValidationError):
    """Raised when a permission map is not a flat mapping of known keys to booleans."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class DuplicateNameError(DomainError):
    status_code = 409


class DuplicateAssignmentError(DomainError):
    """Raised when a (user, role) pair is already assigned."""

    status_code = 409


class RoleInUseError(DomainError):
    status_code = 409

    def __init__(self, holder_count: int):
        self.holder_count = int(holder_count)
        super().__init__(f"Cannot delete role. It is assigned to {self.holder_count} user(s)")


class DatabaseError(DomainError):
    """Opaque infrastructure failure. The message shown to callers stays generic."""

    status_code = 500

    def __init__(self, message: str = "Database error"):
        super().__init__(message)
