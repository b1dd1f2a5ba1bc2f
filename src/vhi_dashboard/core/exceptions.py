class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or a required field is missing."""


class NotFoundError(DomainError):
    """Raised when an id or natural key does not exist in the store."""


class ConflictError(DomainError):
    """Raised on a uniqueness violation (duplicate username, period key, ...)."""


class AuthenticationError(DomainError):
    """Raised when credentials are invalid or there is no session."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StoreError(DomainError):
    """Raised when the underlying persistence store fails."""
