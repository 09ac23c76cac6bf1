class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced student, class, offering or user does not exist."""


class InvalidRangeError(ValidationError):
    """Raised when a date range ends before it starts."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ConcurrencyError(DomainError):
    """Raised when a record changed since the caller last read it."""
