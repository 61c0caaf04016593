"""Password hashing helpers backed by bcrypt.

Each hash embeds its own random salt, so hashing the same password twice
gives two different strings that both verify.
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a plaintext password. Errors from bcrypt propagate to the caller."""
    salt = bcrypt.gensalt(rounds=rounds or DEFAULT_ROUNDS)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(password: str, hashed: str | None) -> bool:
    """Check a plaintext password against a stored hash.

    A mismatch or an unusable stored hash yields False; this never raises.
    """
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
    except ValueError as e:
        logger.warning("Stored password hash is malformed", extra={"error": str(e)})
        return False
