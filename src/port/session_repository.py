from typing import Protocol

from domain.model.session import Session


class SessionRepository(Protocol):
    """Protocol for server-side session storage."""
    def save(self, session: Session) -> None:
        ...

    def get(self, token: str) -> Session | None:
        """Return the stored session, expired or not, or None."""
        ...

    def delete(self, token: str) -> bool:
        """Remove a session. Return True if one was removed."""
        ...
