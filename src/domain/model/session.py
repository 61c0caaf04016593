import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


@dataclass(frozen=True)
class Session:
    """Server-side login session.

    Only the owning user's id is stored; the full User is re-fetched
    whenever the session is resolved.
    """
    token: str
    user_id: str
    created_at: datetime
    expires_at: datetime

    @staticmethod
    def create(user_id: str, ttl_seconds: int) -> 'Session':
        now = datetime.now(timezone.utc)
        return Session(
            token=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=now,
            expires_at=now + timedelta(seconds=ttl_seconds),
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        # MongoDB hands back naive UTC datetimes unless tz_aware is set
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at <= now


@dataclass(frozen=True)
class AuthContext:
    """Identity of the logged-in caller, handed to route handlers."""
    user_id: str
    username: str
    session_token: str
