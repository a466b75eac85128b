class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""


class NotFoundError(DomainError):
    """Raised when no shift or break is in the expected state."""


class ConflictError(DomainError):
    """Raised when an employee would end up with a second open shift."""


class AuthenticationError(DomainError):
    """Raised when the request carries no authenticated principal."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
