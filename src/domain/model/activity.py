# domain/model/activity.py

import uuid
from dataclasses import dataclass
from datetime import date


@dataclass
class Activity:
    """A named, dated entry in a user's activity list."""
    id: str
    name: str
    date: date

    @staticmethod
    def create(name: str, activity_date: date) -> 'Activity':
        """Factory method — assigns a fresh opaque id."""
        return Activity(
            id=uuid.uuid4().hex,
            name=name,
            date=activity_date,
        )

    def rename(self, name: str) -> None:
        """Overwrite the name. Id and date stay as they are."""
        self.name = name
