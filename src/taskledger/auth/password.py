"""Password hashing utilities.

Uses bcrypt for password hashing. bcrypt salts every hash, so hashing the
same password twice gives different strings. The work factor comes from
settings.bcrypt_rounds (default 10).
"""

from functools import lru_cache

import bcrypt

from taskledger.config import settings


def hash_password(password: str) -> str:
    """Hash a password with bcrypt.

    Passwords are truncated to 72 bytes (bcrypt's limit).
    """
    pw_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash (constant-time compare)."""
    try:
        pw_bytes = password.encode("utf-8")[:72]
        hash_bytes = password_hash.encode("utf-8")
        return bcrypt.checkpw(pw_bytes, hash_bytes)
    except (ValueError, TypeError):
        return False


@lru_cache(maxsize=1)
def dummy_hash() -> str:
    """A throwaway hash checked when the username doesn't exist.

    Keeps "unknown user" as slow as "wrong password".
    """
    return hash_password("taskledger-dummy-password")


def verify_dummy(password: str) -> bool:
    """Burn one bcrypt check for a username that doesn't exist."""
    return verify_password(password, dummy_hash())
