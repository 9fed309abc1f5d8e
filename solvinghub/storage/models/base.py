from datetime import datetime, timezone
import uuid

from pydantic import UUID4
from sqlalchemy import JSON, DateTime, String
from sqlalchemy.dialects.postgresql import ARRAY
from sqlmodel import Field, SQLModel

# Text lists are native arrays on Postgres and JSON everywhere else (SQLite in tests)
StringList = JSON().with_variant(ARRAY(String), "postgresql")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(SQLModel, table=False):
    """Abstract base model for database entities with common fields."""

    id: UUID4 = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        description="Unique identifier of the entity.",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        index=True,
        description="Timestamp when the entity was created.",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        description="Timestamp when the entity was last updated.",
    )
