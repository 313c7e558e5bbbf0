class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when an operation is invoked in the wrong state or with invalid input."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ConcurrencyError(DomainError):
    """Raised when a conditional write lost against a concurrent writer."""


class PersistenceError(DomainError):
    """Raised when the underlying store fails a read or write."""
