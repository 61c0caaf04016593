from dataclasses import dataclass, field
from datetime import datetime

from domain.model.activity import Activity
from domain.model.errors import NotFoundError


@dataclass
class User:
    """Domain model representing a user and the activities they own."""
    id: str
    username: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    activities: list[Activity] = field(default_factory=list)

    def find_activity(self, activity_id: str) -> Activity:
        """Return the owned activity with this id. Raises NotFoundError."""
        for activity in self.activities:
            if activity.id == activity_id:
                return activity
        raise NotFoundError("Activity not found")

    def owns_activity(self, activity_id: str) -> bool:
        return any(a.id == activity_id for a in self.activities)
