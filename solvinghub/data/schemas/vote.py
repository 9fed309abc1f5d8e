from typing import Optional

from pydantic import BaseModel


class VoteResponse(BaseModel):
    voted: bool
    votes: Optional[int] = None
