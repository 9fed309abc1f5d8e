import uuid

from sqlalchemy import Column, ForeignKey, Text, Uuid
from sqlmodel import Field

from solvinghub.storage.models.base import BaseModel


class Comment(BaseModel, table=True):
    __tablename__ = "comments"

    problem_id: uuid.UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("problems.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    user_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("users.id"), nullable=False)
    )
    text: str = Field(sa_column=Column(Text, nullable=False))


class Reply(BaseModel, table=True):
    """A reply to a comment. ``problem_id`` is copied from the parent comment."""

    __tablename__ = "replies"

    comment_id: uuid.UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("comments.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    problem_id: uuid.UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("problems.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    user_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("users.id"), nullable=False)
    )
    text: str = Field(sa_column=Column(Text, nullable=False))
