import uuid
from typing import Optional

from pydantic import BaseModel


class UserSummary(BaseModel):
    id: uuid.UUID
    display_name: Optional[str] = None
    photo_url: Optional[str] = None

    model_config = {"from_attributes": True}


class ProblemOwner(UserSummary):
    reputation: int = 0
