import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from solvinghub.data.schemas.enums import ProblemCategory, ProblemStatus
from solvinghub.data.schemas.user import ProblemOwner

TITLE_MIN, TITLE_MAX = 10, 200
DESCRIPTION_MIN, DESCRIPTION_MAX = 50, 5000
MAX_LIST_ITEMS = 5


def _clean_items(items: List[str], label: str) -> List[str]:
    cleaned = [item.strip() for item in items]
    if any(not item for item in cleaned):
        raise ValueError(f"{label} cannot contain empty values")
    if not cleaned:
        raise ValueError(f"At least one {label[:-1]} is required")
    if len(cleaned) > MAX_LIST_ITEMS:
        raise ValueError(f"Maximum {MAX_LIST_ITEMS} {label} allowed")
    return cleaned


def _check_unique(tags: List[str]) -> List[str]:
    if len(set(tags)) != len(tags):
        raise ValueError("Tags must be unique")
    return tags


def _check_title(value: str) -> str:
    value = value.strip()
    if len(value) < TITLE_MIN:
        raise ValueError(f"Title must be at least {TITLE_MIN} characters")
    if len(value) > TITLE_MAX:
        raise ValueError(f"Title must not exceed {TITLE_MAX} characters")
    return value


def _check_description(value: str) -> str:
    value = value.strip()
    if len(value) < DESCRIPTION_MIN:
        raise ValueError(f"Description must be at least {DESCRIPTION_MIN} characters")
    if len(value) > DESCRIPTION_MAX:
        raise ValueError(f"Description must not exceed {DESCRIPTION_MAX} characters")
    return value


_FIELD_CHECKS = {
    "title": _check_title,
    "description": _check_description,
    "tags": lambda value: _check_unique(_clean_items(value, "tags")),
    "impacts": lambda value: _clean_items(value, "impacts"),
    "challenges": lambda value: _clean_items(value, "challenges"),
}


def check_problem_fields(data: dict) -> List[dict]:
    """
    Re-applies the text and list rules to already sanitised data. Only keys
    present in ``data`` are checked. Returns field errors, empty when valid.
    """
    errors = []
    for field, check in _FIELD_CHECKS.items():
        if field not in data:
            continue
        try:
            check(data[field])
        except ValueError as e:
            errors.append({"field": field, "message": str(e), "code": "value_error"})
    return errors


class ProblemCreate(BaseModel):
    title: str = Field(..., examples=["Plastic waste is not sorted in rural schools"])
    description: str
    category: ProblemCategory
    tags: List[str]
    impacts: List[str]
    challenges: List[str]

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        return _check_title(value)

    @field_validator("description")
    @classmethod
    def check_description(cls, value: str) -> str:
        return _check_description(value)

    @field_validator("tags")
    @classmethod
    def check_tags(cls, value: List[str]) -> List[str]:
        return _check_unique(_clean_items(value, "tags"))

    @field_validator("impacts")
    @classmethod
    def check_impacts(cls, value: List[str]) -> List[str]:
        return _clean_items(value, "impacts")

    @field_validator("challenges")
    @classmethod
    def check_challenges(cls, value: List[str]) -> List[str]:
        return _clean_items(value, "challenges")


class ProblemUpdate(BaseModel):
    """Partial update. Empty values are treated as "leave unchanged"."""

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[ProblemCategory] = None
    tags: Optional[List[str]] = None
    impacts: Optional[List[str]] = None
    challenges: Optional[List[str]] = None
    status: Optional[ProblemStatus] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        return _check_title(value)

    @field_validator("description")
    @classmethod
    def check_description(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        return _check_description(value)

    @field_validator("tags")
    @classmethod
    def check_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if not value:
            return None
        return _check_unique(_clean_items(value, "tags"))

    @field_validator("impacts", "challenges")
    @classmethod
    def check_lists(cls, value: Optional[List[str]], info) -> Optional[List[str]]:
        if not value:
            return None
        return _clean_items(value, info.field_name)

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True, mode="json")


class ProblemResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    category: str
    tags: List[str]
    impacts: List[str]
    challenges: List[str]
    status: str
    votes: int
    discussions: int
    view_count: int
    quality_score: float
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    user: Optional[ProblemOwner] = None

    model_config = {"from_attributes": True}


class ProblemEnvelope(BaseModel):
    problem: ProblemResponse


class NextCursor(BaseModel):
    cursor_id: uuid.UUID
    cursor_created_at: datetime


class CursorPage(BaseModel):
    has_more: bool
    next_cursor: Optional[NextCursor] = None
    total_returned: int


class OffsetListResponse(BaseModel):
    problems: List[ProblemResponse] = []
    total: int = 0
    limit: int
    offset: int


class CursorListResponse(BaseModel):
    problems: List[ProblemResponse] = []
    pagination: CursorPage


class DeleteResponse(BaseModel):
    success: bool = True
