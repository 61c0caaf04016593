"""Process-wide MongoClient.

The client is created lazily on first use and cached. A cached client that
stops answering pings is replaced; a client that could never connect in the
first place is treated as a configuration problem and not retried until
reset_client() is called.
"""

import logging
import threading

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from utils.config import get_settings

logger = logging.getLogger(__name__)

_client: MongoClient | None = None
_ever_connected = False
_gave_up = False
# Serialises connect, reconnect and reset across threadpool workers
_lock = threading.Lock()


def reset_client() -> None:
    global _client, _ever_connected, _gave_up
    with _lock:
        if _client is not None:
            _client.close()
        _client = None
        _ever_connected = False
        _gave_up = False


def get_database_name() -> str:
    return get_settings().database_name


def _alive(client: MongoClient) -> bool:
    try:
        client.admin.command('ping')
        return True
    except PyMongoError:
        return False


def _connect(url: str) -> MongoClient:
    """Open a client and ping it once. Raises PyMongoError when unreachable."""
    client = MongoClient(
        url,
        serverSelectionTimeoutMS=5000,
        connectTimeoutMS=5000,
        socketTimeoutMS=30000,
        maxPoolSize=10,
        maxIdleTimeMS=30000,
        waitQueueTimeoutMS=10000,
        # Stored datetimes come back timezone-aware (UTC)
        tz_aware=True,
    )
    client.admin.command('ping')
    return client


def get_mongodb_client() -> MongoClient | None:
    """Return a healthy MongoClient, or None when MongoDB is unreachable."""
    global _client, _ever_connected, _gave_up

    cached = _client
    if cached is not None and _alive(cached):
        return cached

    with _lock:
        if _client is not None:
            # Another worker may have reconnected while this one waited
            if _client is not cached and _alive(_client):
                return _client
            logger.warning("[MONGODB] Cached client stopped responding, reconnecting")
            _client.close()
            _client = None

        if _gave_up:
            return None

        settings = get_settings()
        if not settings.mongo_url:
            logger.error("[MONGODB] MONGO_URL not configured")
            _gave_up = True
            return None

        try:
            _client = _connect(settings.mongo_url)
        except PyMongoError as e:
            if not _ever_connected:
                logger.error("[MONGODB] Initial connection failed", extra={"error": str(e)[:200]})
                _gave_up = True
            return None

        if not _ever_connected:
            logger.info("[MONGODB] Connected", extra={"database": settings.database_name})
            _ever_connected = True
        return _client
