"""In-memory implementation of ActivityRepository for testing.

Shares its data with a FakeUserRepository, the way the MongoDB adapters
share the users collection.
"""

from dataclasses import replace
from datetime import datetime, timezone

from adapter.fake.user_repository import FakeUserRepository
from domain.model.activity import Activity


class FakeActivityRepository:
    def __init__(self, users: FakeUserRepository):
        self.users = users

    # ── write operations ─────────────────────────────────────

    def add(self, user_id: str, activity: Activity) -> bool:
        user = self.users.store.get(user_id)
        if not user:
            return False

        user.activities.append(replace(activity))
        user.updated_at = datetime.now(timezone.utc)
        return True

    def rename(self, user_id: str, activity_id: str, name: str) -> bool:
        user = self.users.store.get(user_id)
        if not user or not user.owns_activity(activity_id):
            return False

        user.find_activity(activity_id).rename(name)
        user.updated_at = datetime.now(timezone.utc)
        return True

    def delete(self, user_id: str, activity_id: str) -> bool:
        user = self.users.store.get(user_id)
        if not user or not user.owns_activity(activity_id):
            return False

        user.activities = [a for a in user.activities if a.id != activity_id]
        user.updated_at = datetime.now(timezone.utc)
        return True

    # ── read operations ──────────────────────────────────────

    def list_for_user(self, user_id: str) -> list[Activity] | None:
        user = self.users.store.get(user_id)
        if not user:
            return None
        return [replace(a) for a in user.activities]

    def get(self, user_id: str, activity_id: str) -> Activity | None:
        user = self.users.store.get(user_id)
        if not user or not user.owns_activity(activity_id):
            return None
        return replace(user.find_activity(activity_id))

    def find_owner_id(self, activity_id: str) -> str | None:
        for user in self.users.store.values():
            if user.owns_activity(activity_id):
                return user.id
        return None
