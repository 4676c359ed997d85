"""Per-platform progress records: validation, upsert, listing and deletion.

A user has at most one record per platform. ``upsert_progress`` looks the
record up by that natural key and updates it in place; when two requests race
to create the same record, the loser's insert trips the storage unique key
and is replayed as an update.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.core.errors import InvalidInputError, MissingFieldError, NotFoundError
from backend.models.progress import Progress

logger = logging.getLogger(__name__)

MAX_PLATFORM_LENGTH = 100
# INTEGER columns are 32-bit signed on Postgres
MAX_STORED_INTEGER = 2**31 - 1
MAX_PROBLEM_COUNT = MAX_STORED_INTEGER
NOT_FOUND_MESSAGE = 'Progress entry not found or unauthorized'


@dataclass(frozen=True)
class ProgressInput:
    platform: str
    problems_solved: int
    total_problems: int


def validate_progress_input(
    platform: str | None,
    problems_solved: int | None,
    total_problems: int | None,
) -> ProgressInput:
    normalized_platform = (platform or '').strip()

    if not normalized_platform or problems_solved is None or total_problems is None:
        raise MissingFieldError('Please provide platform, problemsSolved, and totalProblems')

    if len(normalized_platform) > MAX_PLATFORM_LENGTH:
        raise InvalidInputError(f'Platform must be {MAX_PLATFORM_LENGTH} characters or fewer')

    # bool is an int subclass
    if isinstance(problems_solved, bool) or isinstance(total_problems, bool):
        raise InvalidInputError('Problem counts must be whole numbers')
    if not isinstance(problems_solved, int) or not isinstance(total_problems, int):
        raise InvalidInputError('Problem counts must be whole numbers')

    if problems_solved < 0 or total_problems < 0:
        raise InvalidInputError('Problems cannot be negative')

    if problems_solved > MAX_PROBLEM_COUNT or total_problems > MAX_PROBLEM_COUNT:
        raise InvalidInputError(f'Problem counts must be {MAX_PROBLEM_COUNT} or fewer')

    if problems_solved > total_problems:
        raise InvalidInputError('Problems solved cannot exceed total problems')

    return ProgressInput(normalized_platform, problems_solved, total_problems)


def _find_record(db: Session, user_id: int, platform: str) -> Progress | None:
    return db.query(Progress).filter(
        Progress.user_id == user_id,
        Progress.platform == platform,
    ).first()


def _apply_update(db: Session, record: Progress, data: ProgressInput, timestamp: datetime) -> Progress:
    record.problems_solved = data.problems_solved
    record.total_problems = data.total_problems
    record.last_updated = timestamp
    db.commit()
    db.refresh(record)
    return record


def upsert_progress(
    db: Session,
    user_id: int,
    platform: str | None,
    problems_solved: int | None,
    total_problems: int | None,
    now: datetime | None = None,
) -> Progress:
    data = validate_progress_input(platform, problems_solved, total_problems)
    timestamp = now or datetime.now(timezone.utc)

    existing = _find_record(db, user_id, data.platform)
    if existing is not None:
        return _apply_update(db, existing, data, timestamp)

    record = Progress(
        user_id=user_id,
        platform=data.platform,
        problems_solved=data.problems_solved,
        total_problems=data.total_problems,
        last_updated=timestamp,
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = _find_record(db, user_id, data.platform)
        if existing is None:
            raise
        logger.info(
            'Concurrent insert for user %s platform %r; applying as update',
            user_id,
            data.platform,
        )
        return _apply_update(db, existing, data, timestamp)

    db.refresh(record)
    return record


def list_progress(db: Session, user_id: int) -> list[Progress]:
    return db.query(Progress).filter(
        Progress.user_id == user_id,
    ).order_by(Progress.last_updated.desc(), Progress.id.desc()).all()


def _parse_record_id(progress_id: int | str | None) -> int | None:
    if isinstance(progress_id, bool):
        return None
    if isinstance(progress_id, str):
        # plain ASCII digits only; int() would also take "1_1" and " 11 "
        if not (progress_id.isascii() and progress_id.isdecimal()):
            return None
        progress_id = int(progress_id)
    if not isinstance(progress_id, int) or not 1 <= progress_id <= MAX_STORED_INTEGER:
        return None
    return progress_id


def delete_progress(db: Session, user_id: int, progress_id: int | str) -> None:
    record_id = _parse_record_id(progress_id)
    if record_id is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)

    # the owner filter makes someone else's record indistinguishable from a missing one
    record = db.query(Progress).filter(
        Progress.id == record_id,
        Progress.user_id == user_id,
    ).first()
    if record is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)

    db.delete(record)
    db.commit()
