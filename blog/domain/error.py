"""Domain layer errors."""

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable error category exposed to API clients."""

    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"


class DomainError(Exception):
    """Base domain error."""

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT


class ValidationError(DomainError):
    """Domain validation error."""

    kind = ErrorKind.INVALID_ARGUMENT


class ResolutionFailure(str, Enum):
    """Why identity resolution failed.

    Kept for logs and tests only; clients always see the same message for
    a bad token and a bad admin key.
    """

    INVALID_TOKEN = "invalid_token"
    UNAUTHENTICATED = "unauthenticated"


class AuthenticationError(DomainError):
    """Raised when a request has no usable credentials."""

    kind = ErrorKind.UNAUTHENTICATED

    def __init__(self, reason: ResolutionFailure, credentials_supplied: bool = True):
        self.reason = reason
        super().__init__(
            "Invalid credentials" if credentials_supplied else "Authentication required"
        )


class NotAuthorizedError(DomainError):
    """Raised when an identity may not act on a resource."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, resource: str, resource_id: str, user_id: str | None):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"User {user_id or 'anonymous'} is not authorized to modify "
            f"{resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a write collides with existing unique data."""

    kind = ErrorKind.CONFLICT


class StoreUnavailableError(DomainError):
    """Raised when the backing store cannot be reached. Retryable."""

    kind = ErrorKind.UNAVAILABLE

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Storage unavailable during {operation}")
