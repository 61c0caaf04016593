"""In-memory implementation of UserRepository for testing."""

import uuid
from datetime import datetime, timezone

from domain.model.errors import DuplicateError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, username: str, password_hash: str) -> User:
        if any(u.username == username for u in self.store.values()):
            raise DuplicateError("Username already registered")

        now = datetime.now(timezone.utc)
        user = User(
            id=uuid.uuid4().hex,
            username=username,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        self.store[user.id] = user
        return user

    # ── read operations ──────────────────────────────────────

    def get_by_username(self, username: str) -> User | None:
        for user in self.store.values():
            if user.username == username:
                return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)
