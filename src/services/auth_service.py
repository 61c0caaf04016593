"""Auth service — registration, login and session resolution.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from dataclasses import dataclass

from domain.model.errors import UnknownUserError, WrongPasswordError
from domain.model.session import AuthContext, Session
from domain.model.user import User
from port.session_repository import SessionRepository
from port.user_repository import UserRepository
from utils.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    user: User
    session: Session


class AuthService:
    """Credential checks and session lifecycle over injected stores."""

    def __init__(
        self,
        users: UserRepository,
        sessions: SessionRepository,
        session_ttl_seconds: int = 86400,
        bcrypt_rounds: int | None = None,
    ):
        self.users = users
        self.sessions = sessions
        self.session_ttl_seconds = session_ttl_seconds
        self.bcrypt_rounds = bcrypt_rounds

    def register(self, username: str, password: str) -> User:
        """Register a new user.

        Raises:
            DuplicateError: username already registered
            StoreError: the store failed
        """
        password_hash = hash_password(password, self.bcrypt_rounds)
        user = self.users.create(username=username, password_hash=password_hash)
        logger.info("User registered", extra={"userId": user.id, "username": username})
        return user

    def authenticate(self, username: str, password: str) -> LoginResult:
        """Check credentials and open a session.

        Raises:
            UnknownUserError: no such username
            WrongPasswordError: password does not match
        """
        user = self.users.get_by_username(username)
        if not user:
            logger.info("Login rejected: unknown username", extra={"username": username})
            raise UnknownUserError(username)

        if not verify_password(password, user.password_hash):
            logger.info("Login rejected: wrong password", extra={"userId": user.id})
            raise WrongPasswordError(username)

        session = Session.create(user.id, self.session_ttl_seconds)
        self.sessions.save(session)
        logger.info("User logged in", extra={"userId": user.id})
        return LoginResult(user=user, session=session)

    def resolve(self, token: str | None) -> AuthContext | None:
        """Turn a session token back into the caller's identity.

        The user is re-read on every call; a session whose user has been
        removed resolves to None, as does a missing or expired session.
        """
        if not token:
            return None

        session = self.sessions.get(token)
        if not session:
            return None
        if session.is_expired():
            self.sessions.delete(token)
            return None

        user = self.users.get_by_id(session.user_id)
        if not user:
            logger.warning("Session refers to a missing user", extra={"userId": session.user_id})
            return None

        return AuthContext(user_id=user.id, username=user.username, session_token=token)

    def logout(self, token: str | None) -> None:
        if not token:
            return
        if self.sessions.delete(token):
            logger.info("Session closed")
