import uuid

from sqlalchemy import Column, ForeignKey, UniqueConstraint, Uuid
from sqlmodel import Field

from solvinghub.storage.models.base import BaseModel


class ProblemVote(BaseModel, table=True):
    """An upvote. At most one row per (user, problem)."""

    __tablename__ = "problem_votes"
    __table_args__ = (
        UniqueConstraint("user_id", "problem_id", name="uq_problem_votes_user_problem"),
    )

    user_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("users.id"), nullable=False)
    )
    problem_id: uuid.UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("problems.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
