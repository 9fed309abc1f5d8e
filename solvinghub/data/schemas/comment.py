import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator

from solvinghub.data.schemas.user import UserSummary

COMMENT_MAX = 2000
REPLY_MAX = 1000


class CommentCreate(BaseModel):
    text: str

    @field_validator("text")
    @classmethod
    def check_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Comment cannot be empty")
        if len(value) > COMMENT_MAX:
            raise ValueError(f"Comment must not exceed {COMMENT_MAX} characters")
        return value


class ReplyCreate(BaseModel):
    text: str

    @field_validator("text")
    @classmethod
    def check_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Reply cannot be empty")
        if len(value) > REPLY_MAX:
            raise ValueError(f"Reply must not exceed {REPLY_MAX} characters")
        return value


class ReplyResponse(BaseModel):
    id: uuid.UUID
    comment_id: uuid.UUID
    problem_id: uuid.UUID
    user_id: uuid.UUID
    text: str
    created_at: datetime
    user: Optional[UserSummary] = None

    model_config = {"from_attributes": True}


class CommentResponse(BaseModel):
    id: uuid.UUID
    problem_id: uuid.UUID
    user_id: uuid.UUID
    text: str
    created_at: datetime
    user: Optional[UserSummary] = None
    replies: List[ReplyResponse] = []

    model_config = {"from_attributes": True}


class CommentEnvelope(BaseModel):
    comment: CommentResponse


class CommentListResponse(BaseModel):
    comments: List[CommentResponse] = []


class ReplyEnvelope(BaseModel):
    reply: ReplyResponse
