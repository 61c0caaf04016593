"""Port definition for ActivityRepository.

Activities are embedded in their owner's user document, so every
operation is keyed by the owning user's id. Each write touches exactly
one user document and is atomic on its own.
"""

from typing import Protocol

from domain.model.activity import Activity


class ActivityRepository(Protocol):
    def list_for_user(self, user_id: str) -> list[Activity] | None:
        """Activities in insertion order, or None if the user is gone."""
        ...

    def get(self, user_id: str, activity_id: str) -> Activity | None: ...

    def add(self, user_id: str, activity: Activity) -> bool:
        """Append to the user's list. False if the user does not exist."""
        ...

    def rename(self, user_id: str, activity_id: str, name: str) -> bool:
        """False if the user does not own an activity with this id."""
        ...

    def delete(self, user_id: str, activity_id: str) -> bool:
        """False if the user does not own an activity with this id."""
        ...

    def find_owner_id(self, activity_id: str) -> str | None:
        """Id of whichever user owns this activity, if any."""
        ...
