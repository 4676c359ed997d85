"""Error taxonomy for the tracker API and the handlers that render it.

Every failure reaches the client as ``{"message": ...}``. Login failures
share one message whether the account is unknown or the password is wrong,
and expired, forged and malformed tokens share another.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = 'Invalid credentials'
MISSING_TOKEN_MESSAGE = 'No token provided, authorization denied'
INVALID_TOKEN_MESSAGE = 'Token is not valid or has expired'


class TrackerError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'Internal server error'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingFieldError(TrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Please provide all required fields'


class InvalidInputError(TrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Invalid input'


class DuplicateIdentityError(TrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'User with this email or username already exists'


class InvalidCredentialsError(TrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = INVALID_CREDENTIALS_MESSAGE


class UnauthenticatedError(TrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = MISSING_TOKEN_MESSAGE


class InvalidTokenError(TrackerError):
    """Raised by the token verifier; never rendered with its internal reason."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = INVALID_TOKEN_MESSAGE

    def __init__(self, reason: str = 'invalid'):
        self.reason = reason
        super().__init__(INVALID_TOKEN_MESSAGE)


class NotFoundError(TrackerError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Not found'


class InternalError(TrackerError):
    pass


async def tracker_error_handler(request: Request, exc: TrackerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error('%s %s failed: %s', request.method, request.url.path, exc.message)
    else:
        logger.info('%s %s -> %s: %s', request.method, request.url.path, exc.status_code, exc.message)

    headers = {'WWW-Authenticate': 'Bearer'} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=exc.status_code, content={'message': exc.message}, headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info('Validation error on %s %s: %s', request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'message': InvalidInputError.default_message},
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error('Unexpected error on %s %s', request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'message': InternalError.default_message},
    )
