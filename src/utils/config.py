"""Application settings read from the environment.

Call load_dotenv() before the first get_settings() so values from a local
.env file are picked up. Tests that change the environment must call
get_settings.cache_clear().
"""

import os
import logging
from dataclasses import dataclass
from functools import lru_cache

logger = logging.getLogger(__name__)

DEV_SESSION_SECRET = "dev-insecure-session-secret"
MIN_SESSION_TTL_SECONDS = 60


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    port: int
    mongo_url: str
    database_name: str
    session_secret: str
    session_ttl_seconds: int
    bcrypt_rounds: int
    log_level: str

    @property
    def is_prod(self) -> bool:
        return self.app_env == "prod"


def _int(value: str | None, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    app_env = (os.getenv("APP_ENV") or "dev").strip().lower()

    session_secret = os.getenv("SESSION_SECRET", "")
    if not session_secret:
        if app_env == "prod":
            raise ValueError(
                "SESSION_SECRET environment variable is required in production. "
                "Generate a secure key with: openssl rand -hex 32"
            )
        logger.warning("SESSION_SECRET not set, using the development default")
        session_secret = DEV_SESSION_SECRET

    return Settings(
        app_env=app_env,
        port=_int(os.getenv("PORT"), 3001),
        mongo_url=os.getenv("MONGO_URL", "mongodb://localhost:27017"),
        database_name=os.getenv("MONGODB_DATABASE", "activity_tracker"),
        session_secret=session_secret,
        # Session record, cookie max_age and cookie exp all use this value
        session_ttl_seconds=max(MIN_SESSION_TTL_SECONDS, _int(os.getenv("SESSION_TTL_SECONDS"), 86400)),
        # bcrypt accepts 4..31
        bcrypt_rounds=min(31, max(4, _int(os.getenv("BCRYPT_ROUNDS"), 10))),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
