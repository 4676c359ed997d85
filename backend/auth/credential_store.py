"""User accounts: creation, lookup and password verification.

Passwords are hashed explicitly in :func:`create_user`; nothing hashes
implicitly on flush, so the model only ever sees ``password_hash``.
"""

import logging

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.auth import passwords
from backend.core.errors import DuplicateIdentityError, InvalidInputError
from backend.models.user import User

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str | None) -> str:
    return (email or '').strip().lower()


def normalize_username(username: str | None) -> str:
    return (username or '').strip()


def create_user(db: Session, username: str, email: str, password: str) -> User:
    normalized_username = normalize_username(username)
    normalized_email = normalize_email(email)

    if len(normalized_username) < MIN_USERNAME_LENGTH:
        raise InvalidInputError(f'Username must be at least {MIN_USERNAME_LENGTH} characters.')
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInputError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters.')
    if len(password.encode('utf-8')) > passwords.MAX_PASSWORD_BYTES:
        raise InvalidInputError(f'Password must be at most {passwords.MAX_PASSWORD_BYTES} bytes.')

    existing = db.query(User.id).filter(
        or_(
            func.lower(User.email) == normalized_email,
            User.username == normalized_username,
        )
    ).first()
    if existing:
        raise DuplicateIdentityError()

    user = User(
        username=normalized_username,
        email=normalized_email,
        password_hash=passwords.hash_password(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        # a concurrent registration claimed the same username or email
        db.rollback()
        raise DuplicateIdentityError() from exc
    db.refresh(user)

    logger.info('Registered user %s (id=%s)', user.username, user.id)
    return user


def find_by_email(db: Session, email: str) -> User | None:
    normalized_email = normalize_email(email)
    if not normalized_email:
        return None
    return db.query(User).filter(func.lower(User.email) == normalized_email).first()


def verify_password(user: User, candidate: str) -> bool:
    return passwords.check_password(candidate, user.password_hash)


def authenticate(db: Session, email: str, password: str) -> User | None:
    user = find_by_email(db, email)
    if user is None:
        passwords.check_password(password, passwords.dummy_hash())
        return None
    if not verify_password(user, password):
        return None
    return user
