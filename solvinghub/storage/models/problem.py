import uuid
from typing import List

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text, Uuid
from sqlmodel import Field

from solvinghub.storage.models.base import BaseModel, StringList


class Problem(BaseModel, table=True):
    """
    A user-submitted problem statement.

    ``votes`` and ``discussions`` are denormalized counters; they are
    adjusted in the same transaction as the vote, comment or reply rows
    they count.
    """

    __tablename__ = "problems"

    title: str = Field(sa_column=Column(String(200), nullable=False))
    description: str = Field(sa_column=Column(Text, nullable=False))
    category: str = Field(sa_column=Column(String(50), nullable=False, index=True))
    tags: List[str] = Field(
        default_factory=list, sa_column=Column(StringList, nullable=False)
    )
    impacts: List[str] = Field(
        default_factory=list, sa_column=Column(StringList, nullable=False)
    )
    challenges: List[str] = Field(
        default_factory=list, sa_column=Column(StringList, nullable=False)
    )
    status: str = Field(
        default="open",
        sa_column=Column(String(20), nullable=False, default="open", index=True),
    )
    votes: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))
    discussions: int = Field(
        default=0, sa_column=Column(Integer, nullable=False, default=0)
    )
    view_count: int = Field(
        default=0, sa_column=Column(Integer, nullable=False, default=0)
    )
    quality_score: float = Field(
        default=0.0, sa_column=Column(Float, nullable=False, default=0.0)
    )
    user_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    )

    def __repr__(self):
        return f"<Problem {self.title!r} ({self.status})>"
