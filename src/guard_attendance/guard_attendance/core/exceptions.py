class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDateError(ValidationError):
    """Raised when a date is missing or cannot be parsed."""


class NotFoundError(DomainError):
    """Raised when a worker or vacation request does not exist."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
