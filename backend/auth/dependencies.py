from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from backend.auth import jwt_handler
from backend.core.errors import (
    INVALID_TOKEN_MESSAGE,
    InvalidTokenError,
    UnauthenticatedError,
)

# auto_error is off so a missing header produces our own 401 body.
security = HTTPBearer(auto_error=False)


def authenticate_request(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> int:
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()

    try:
        user_id = jwt_handler.verify_access_token(credentials.credentials)
    except InvalidTokenError as exc:
        raise UnauthenticatedError(INVALID_TOKEN_MESSAGE) from exc

    request.state.user_id = user_id
    return user_id


def get_current_user_id(request: Request) -> int:
    user_id = getattr(request.state, 'user_id', None)
    if user_id is None:
        raise UnauthenticatedError()
    return user_id
