"""MongoDB implementation of ActivityRepository.

Activities live in the `activities` array of their owner's user document.
Every write is a single update_one on that document, so it either lands
completely or not at all.
"""

from datetime import date, datetime, time, timezone
from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.activity import Activity
from domain.model.errors import StoreError

logger = getLogger(__name__)


def activity_to_doc(activity: Activity) -> dict:
    """BSON has no date type; store midnight UTC."""
    return {
        'id': activity.id,
        'name': activity.name,
        'date': datetime.combine(activity.date, time.min, tzinfo=timezone.utc),
    }


def activity_from_doc(doc: dict) -> Activity:
    value = doc['date']
    if isinstance(value, datetime):
        value = value.date()
    elif not isinstance(value, date):
        value = date.fromisoformat(str(value)[:10])
    return Activity(id=doc['id'], name=doc['name'], date=value)


class MongoActivityRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    # ── write operations ─────────────────────────────────────

    def add(self, user_id: str, activity: Activity) -> bool:
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                {
                    '$push': {'activities': activity_to_doc(activity)},
                    '$set': {'updated_at': datetime.now(timezone.utc)},
                },
            )
        except PyMongoError as e:
            logger.error("Failed to add activity", extra={"userId": user_id, "error": str(e)})
            raise StoreError("Failed to add activity") from e

        if result.matched_count == 0:
            logger.warning("User not found for new activity", extra={"userId": user_id})
            return False

        logger.info("Activity added", extra={"userId": user_id, "activityId": activity.id})
        return True

    def rename(self, user_id: str, activity_id: str, name: str) -> bool:
        try:
            result = self.collection.update_one(
                {'_id': user_id, 'activities.id': activity_id},
                {'$set': {'activities.$.name': name, 'updated_at': datetime.now(timezone.utc)}},
            )
        except PyMongoError as e:
            logger.error("Failed to rename activity", extra={
                "userId": user_id, "activityId": activity_id, "error": str(e)
            })
            raise StoreError("Failed to update activity") from e

        if result.matched_count == 0:
            return False

        logger.info("Activity renamed", extra={"userId": user_id, "activityId": activity_id})
        return True

    def delete(self, user_id: str, activity_id: str) -> bool:
        try:
            result = self.collection.update_one(
                {'_id': user_id, 'activities.id': activity_id},
                {
                    '$pull': {'activities': {'id': activity_id}},
                    '$set': {'updated_at': datetime.now(timezone.utc)},
                },
            )
        except PyMongoError as e:
            logger.error("Failed to delete activity", extra={
                "userId": user_id, "activityId": activity_id, "error": str(e)
            })
            raise StoreError("Failed to delete activity") from e

        if result.matched_count == 0:
            return False

        logger.info("Activity deleted", extra={"userId": user_id, "activityId": activity_id})
        return True

    # ── read operations ──────────────────────────────────────

    def list_for_user(self, user_id: str) -> list[Activity] | None:
        try:
            doc = self.collection.find_one({'_id': user_id}, {'activities': 1})
        except PyMongoError as e:
            logger.error("Failed to list activities", extra={"userId": user_id, "error": str(e)})
            raise StoreError("Failed to list activities") from e

        if doc is None:
            return None
        return [activity_from_doc(a) for a in doc.get('activities', [])]

    def get(self, user_id: str, activity_id: str) -> Activity | None:
        try:
            doc = self.collection.find_one(
                {'_id': user_id, 'activities.id': activity_id},
                {'activities.$': 1},
            )
        except PyMongoError as e:
            logger.error("Failed to get activity", extra={
                "userId": user_id, "activityId": activity_id, "error": str(e)
            })
            raise StoreError("Failed to get activity") from e

        if not doc or not doc.get('activities'):
            return None
        return activity_from_doc(doc['activities'][0])

    def find_owner_id(self, activity_id: str) -> str | None:
        try:
            doc = self.collection.find_one({'activities.id': activity_id}, {'_id': 1})
        except PyMongoError as e:
            logger.error("Failed to look up activity owner", extra={"activityId": activity_id, "error": str(e)})
            raise StoreError("Failed to get activity") from e
        return doc['_id'] if doc else None
