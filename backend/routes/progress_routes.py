import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.dependencies import authenticate_request, get_current_user_id
from backend.core.errors import InternalError
from backend.database import get_db
from backend.services import progress_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=['progress'], dependencies=[Depends(authenticate_request)])


class ProgressUpsertRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    platform: str | None = None
    problems_solved: int | None = Field(default=None, alias='problemsSolved')
    total_problems: int | None = Field(default=None, alias='totalProblems')

    @field_validator('problems_solved', 'total_problems', mode='before')
    @classmethod
    def reject_booleans(cls, value):
        if isinstance(value, bool):
            raise ValueError('Problem counts must be whole numbers.')
        return value


class ProgressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    user_id: int
    platform: str
    problems_solved: int
    total_problems: int
    last_updated: datetime


class ProgressSavedResponse(BaseModel):
    progress: ProgressResponse
    message: str


class MessageResponse(BaseModel):
    message: str


@router.get('', response_model=list[ProgressResponse])
def list_my_progress(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        return progress_service.list_progress(db, user_id)
    except SQLAlchemyError as exc:
        logger.exception('Get progress error')
        raise InternalError('Server error fetching progress') from exc


@router.post('', response_model=ProgressSavedResponse)
def save_progress(
    data: ProgressUpsertRequest,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        record = progress_service.upsert_progress(
            db,
            user_id=user_id,
            platform=data.platform,
            problems_solved=data.problems_solved,
            total_problems=data.total_problems,
        )
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Add/Update progress error')
        raise InternalError('Server error updating progress') from exc

    return ProgressSavedResponse(
        progress=ProgressResponse.model_validate(record),
        message='Progress updated successfully',
    )


@router.delete('/{progress_id}', response_model=MessageResponse)
def delete_my_progress(
    progress_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        progress_service.delete_progress(db, user_id, progress_id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Delete progress error')
        raise InternalError('Server error deleting progress') from exc

    return MessageResponse(message='Progress deleted successfully')
