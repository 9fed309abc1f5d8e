from typing import Optional

from sqlalchemy import Column, Integer, String
from sqlmodel import Field

from solvinghub.storage.models.base import BaseModel


class User(BaseModel, table=True):
    """Public profile of a Supabase Auth user. The id matches the auth user id."""

    __tablename__ = "users"

    email: Optional[str] = Field(
        default=None,
        sa_column=Column(String(320), nullable=True),
        description="Email address from the auth provider.",
    )
    display_name: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="Name shown next to problems and comments.",
    )
    photo_url: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
        description="Avatar URL.",
    )
    reputation: int = Field(
        default=0,
        sa_column=Column(Integer, default=0, nullable=False),
        description="Community reputation score.",
    )

    def __repr__(self):
        return f"<User {self.display_name or self.id}>"
