"""Activity service — CRUD over the activities a user owns.

Every lookup is scoped to the requesting user. An id that belongs to
somebody else raises PermissionDeniedError; an id nobody owns raises
NotFoundError. Neither case touches any stored document.
"""

import logging
from datetime import date

from domain.model.activity import Activity
from domain.model.errors import NotFoundError, PermissionDeniedError
from port.activity_repository import ActivityRepository

logger = logging.getLogger(__name__)


def list_activities(repo: ActivityRepository, user_id: str) -> list[Activity]:
    """Return the user's activities in insertion order."""
    activities = repo.list_for_user(user_id)
    if activities is None:
        raise NotFoundError("User not found")
    return activities


def add_activity(repo: ActivityRepository, user_id: str, name: str, activity_date: date) -> Activity:
    """Append a new activity to the user's list."""
    activity = Activity.create(name, activity_date)
    if not repo.add(user_id, activity):
        raise NotFoundError("User not found")
    return activity


def get_activity(repo: ActivityRepository, user_id: str, activity_id: str) -> Activity:
    activity = repo.get(user_id, activity_id)
    if activity is None:
        _raise_missing(repo, user_id, activity_id)
    return activity


def rename_activity(repo: ActivityRepository, user_id: str, activity_id: str, name: str) -> Activity:
    """Overwrite the activity's name and return the updated activity."""
    if not repo.rename(user_id, activity_id, name):
        _raise_missing(repo, user_id, activity_id)
    return get_activity(repo, user_id, activity_id)


def delete_activity(repo: ActivityRepository, user_id: str, activity_id: str) -> None:
    if not repo.delete(user_id, activity_id):
        _raise_missing(repo, user_id, activity_id)


def _raise_missing(repo: ActivityRepository, user_id: str, activity_id: str) -> None:
    owner_id = repo.find_owner_id(activity_id)
    if owner_id is not None and owner_id != user_id:
        logger.warning("Activity access denied", extra={
            "userId": user_id, "activityId": activity_id
        })
        raise PermissionDeniedError("Not authorized to access this activity")
    raise NotFoundError("Activity not found")
