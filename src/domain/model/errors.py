"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class PermissionDeniedError(DomainError):
    """Caller lacks permission for the requested action."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class StoreError(DomainError):
    """The document store is unavailable or rejected a write."""


class AuthenticationError(DomainError):
    """Submitted credentials were rejected.

    Subclasses tell the two failure modes apart for logging; callers facing
    end users should only ever surface the generic message.
    """

    GENERIC_MESSAGE = "Invalid username or password"


class UnknownUserError(AuthenticationError):
    """No user is registered under the submitted username."""

    def __init__(self, username: str):
        self.username = username
        super().__init__("Incorrect username")


class WrongPasswordError(AuthenticationError):
    """The user exists but the password does not match the stored hash."""

    def __init__(self, username: str):
        self.username = username
        super().__init__("Incorrect password")
