from functools import lru_cache

import bcrypt

from backend.core import config

# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int | None = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or config.PASSWORD_HASH_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # malformed stored hash or over-long candidate
        return False


@lru_cache(maxsize=1)
def dummy_hash() -> str:
    """Hash checked for unknown accounts so both login failures cost the same."""
    return hash_password("not-a-real-password")
