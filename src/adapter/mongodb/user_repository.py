"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb import USERS_COLLECTION_NAME
from adapter.mongodb.activity_repository import activity_from_doc
from adapter.mongodb.indexes import IndexSpec, ensure_collection_indexes
from domain.model.errors import DuplicateError, StoreError
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    INDEXES = (
        IndexSpec([('username', 1)], 'idx_users_username', {'unique': True}),
        # Owner lookup when an activity id is not found under the caller
        IndexSpec([('activities.id', 1)], 'idx_users_activity_id'),
    )

    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        return ensure_collection_indexes(self.collection, self.INDEXES)

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            username=doc['username'],
            password_hash=doc['password_hash'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            activities=[activity_from_doc(a) for a in doc.get('activities', [])],
        )

    def create(self, username: str, password_hash: str) -> User:
        """Create a new user and return the User object."""
        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        user_doc = {
            '_id': user_id,
            'username': username,
            'password_hash': password_hash,
            'created_at': now,
            'updated_at': now,
            'activities': [],
        }
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            logger.warning("User creation failed: username already exists", extra={"username": username})
            raise DuplicateError("Username already registered") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"username": username, "error": str(e)})
            raise StoreError("Failed to create user") from e

        logger.info("User created", extra={"userId": user_id, "username": username})
        return self._to_domain(user_doc)

    def get_by_username(self, username: str) -> User | None:
        """Find a user by username. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'username': username})
        except PyMongoError as e:
            logger.error("Failed to get user by username", extra={"username": username, "error": str(e)})
            raise StoreError("Failed to get user") from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise StoreError("Failed to get user") from e
        return self._to_domain(doc) if doc else None
