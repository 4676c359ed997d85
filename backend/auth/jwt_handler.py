import logging
from datetime import datetime, timedelta, timezone

import jwt

from backend.core import config
from backend.core.errors import InvalidTokenError

logger = logging.getLogger(__name__)


def create_access_token(user_id: int, issued_at: datetime | None = None) -> str:
    issued = issued_at or datetime.now(timezone.utc)
    expire = issued + timedelta(minutes=config.JWT_EXPIRES_MINUTES)
    payload = {"sub": str(user_id), "iat": issued, "exp": expire}
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    return jwt.decode(
        token,
        config.JWT_SECRET_KEY,
        algorithms=[config.JWT_ALGORITHM],
        options={"require": ["sub", "exp", "iat"]},
    )


def verify_access_token(token: str) -> int:
    """Return the user id carried by ``token`` or raise InvalidTokenError."""
    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError as exc:
        logger.debug("Rejected expired access token")
        raise InvalidTokenError("expired") from exc
    except jwt.InvalidTokenError as exc:
        logger.warning("Rejected invalid access token: %s", exc)
        raise InvalidTokenError("invalid") from exc

    try:
        return int(payload["sub"])
    except (TypeError, ValueError) as exc:
        logger.warning("Rejected access token with non-numeric subject")
        raise InvalidTokenError("invalid") from exc
