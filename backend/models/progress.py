"""Progress model definitions."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.sql import func

from backend.database import Base


class Progress(Base):
    """Solved/total counters for one user on one practice platform."""
    __tablename__ = "progress"
    __table_args__ = (
        UniqueConstraint("user_id", "platform", name="uq_progress_user_platform"),
        CheckConstraint("problems_solved >= 0", name="ck_progress_solved_non_negative"),
        CheckConstraint("total_problems >= 0", name="ck_progress_total_non_negative"),
        CheckConstraint("problems_solved <= total_problems", name="ck_progress_solved_within_total"),
        Index("idx_progress_user_updated", "user_id", "last_updated"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    platform = Column(String(100), nullable=False)  # e.g. LeetCode, HackerRank, Codeforces
    problems_solved = Column(Integer, nullable=False, default=0)
    total_problems = Column(Integer, nullable=False, default=0)
    last_updated = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
