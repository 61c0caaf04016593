"""MongoDB implementation of SessionRepository.

A TTL index on `expires_at` lets MongoDB purge stale sessions on its own;
the purge runs about once a minute, so reads still check expiry.
"""

from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import SESSIONS_COLLECTION_NAME
from adapter.mongodb.indexes import IndexSpec, ensure_collection_indexes
from domain.model.errors import StoreError
from domain.model.session import Session

logger = getLogger(__name__)


class MongoSessionRepository:
    INDEXES = (
        IndexSpec([('expires_at', 1)], 'idx_sessions_ttl', {'expireAfterSeconds': 0}),
        IndexSpec([('user_id', 1)], 'idx_sessions_user_id'),
    )

    def __init__(self, db: Database):
        self.collection = db[SESSIONS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        return ensure_collection_indexes(self.collection, self.INDEXES)

    def save(self, session: Session) -> None:
        try:
            self.collection.insert_one({
                '_id': session.token,
                'user_id': session.user_id,
                'created_at': session.created_at,
                'expires_at': session.expires_at,
            })
        except PyMongoError as e:
            logger.error("Failed to save session", extra={"userId": session.user_id, "error": str(e)})
            raise StoreError("Failed to create session") from e

    def get(self, token: str) -> Session | None:
        try:
            doc = self.collection.find_one({'_id': token})
        except PyMongoError as e:
            logger.error("Failed to get session", extra={"error": str(e)})
            raise StoreError("Failed to get session") from e

        if not doc:
            return None
        return Session(
            token=doc['_id'],
            user_id=doc['user_id'],
            created_at=doc['created_at'],
            expires_at=doc['expires_at'],
        )

    def delete(self, token: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': token})
        except PyMongoError as e:
            logger.error("Failed to delete session", extra={"error": str(e)})
            raise StoreError("Failed to delete session") from e
        return result.deleted_count > 0
