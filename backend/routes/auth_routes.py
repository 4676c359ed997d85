import logging

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth import credential_store, jwt_handler
from backend.core.errors import InternalError, InvalidCredentialsError, MissingFieldError
from backend.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=['auth'])


class RegisterRequest(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class AuthResponse(BaseModel):
    token: str
    user_id: int
    username: str
    message: str


@router.post('/register', response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    if not data.username or not data.email or not data.password:
        raise MissingFieldError('Please provide all required fields')

    try:
        user = credential_store.create_user(db, data.username, data.email, data.password)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Register error')
        raise InternalError('Server error during registration') from exc

    return AuthResponse(
        token=jwt_handler.create_access_token(user.id),
        user_id=user.id,
        username=user.username,
        message='Registration successful',
    )


@router.post('/login', response_model=AuthResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    if not data.email or not data.password:
        raise MissingFieldError('Please provide email and password')

    try:
        user = credential_store.authenticate(db, data.email, data.password)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Login error')
        raise InternalError('Server error during login') from exc

    if user is None:
        # same response whether the email is unknown or the password is wrong
        raise InvalidCredentialsError()

    logger.info('User %s logged in', user.id)
    return AuthResponse(
        token=jwt_handler.create_access_token(user.id),
        user_id=user.id,
        username=user.username,
        message='Login successful',
    )
