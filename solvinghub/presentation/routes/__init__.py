from .comment import comment_router
from .problem import problem_router
from .vote import vote_router

__all__ = [
    "comment_router",
    "problem_router",
    "vote_router",
]
