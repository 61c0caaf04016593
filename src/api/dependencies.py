from fastapi import Depends, HTTPException

from adapter.mongodb.activity_repository import MongoActivityRepository
from adapter.mongodb.connection import get_database_name, get_mongodb_client
from adapter.mongodb.session_repository import MongoSessionRepository
from adapter.mongodb.user_repository import MongoUserRepository
from port.activity_repository import ActivityRepository
from port.session_repository import SessionRepository
from port.user_repository import UserRepository
from services.auth_service import AuthService
from utils.config import get_settings


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[get_database_name()]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_activity_repo() -> ActivityRepository:
    return MongoActivityRepository(_get_db())


def get_session_repo() -> SessionRepository:
    return MongoSessionRepository(_get_db())


def get_auth_service(
    users: UserRepository = Depends(get_user_repo),
    sessions: SessionRepository = Depends(get_session_repo),
) -> AuthService:
    settings = get_settings()
    return AuthService(
        users,
        sessions,
        session_ttl_seconds=settings.session_ttl_seconds,
        bcrypt_rounds=settings.bcrypt_rounds,
    )
