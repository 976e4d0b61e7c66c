class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ConflictError(DomainError):
    """Raised when a write collides with existing data (e.g. duplicate username)."""


class PersistenceError(DomainError):
    """Raised when the store document cannot be written to its storage backend."""


class SchemaVersionError(DomainError):
    """Raised in strict mode when the stored document has an unexpected version."""
