from .base import BaseModel, StringList, utc_now
from .comment import Comment, Reply
from .problem import Problem
from .user import User
from .vote import ProblemVote


__all__ = [
    "BaseModel",
    "StringList",
    "utc_now",
    "User",
    "Problem",
    "Comment",
    "Reply",
    "ProblemVote",
]
