from .auth import AuthenticatedUser
from .comment import (
    CommentCreate,
    CommentEnvelope,
    CommentListResponse,
    CommentResponse,
    ReplyCreate,
    ReplyEnvelope,
    ReplyResponse,
)
from .enums import ProblemCategory, ProblemStatus, SortField
from .problem import (
    check_problem_fields,
    CursorListResponse,
    CursorPage,
    DeleteResponse,
    NextCursor,
    OffsetListResponse,
    ProblemCreate,
    ProblemEnvelope,
    ProblemResponse,
    ProblemUpdate,
)
from .user import ProblemOwner, UserSummary
from .vote import VoteResponse

__all__ = [
    "AuthenticatedUser",
    "CommentCreate",
    "CommentEnvelope",
    "CommentListResponse",
    "CommentResponse",
    "ReplyCreate",
    "ReplyEnvelope",
    "ReplyResponse",
    "ProblemCategory",
    "ProblemStatus",
    "SortField",
    "CursorListResponse",
    "CursorPage",
    "DeleteResponse",
    "NextCursor",
    "OffsetListResponse",
    "ProblemCreate",
    "ProblemEnvelope",
    "ProblemResponse",
    "ProblemUpdate",
    "ProblemOwner",
    "UserSummary",
    "VoteResponse",
    "check_problem_fields",
]
