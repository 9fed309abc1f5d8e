from .database import get_engine, get_session, init_db, require_configuration
from .comment import (
    create_comment_in_db,
    create_reply_in_db,
    delete_comment_from_db,
    get_comment_by_id,
    list_comments_with_replies,
)
from .problem import (
    adjust_problem_counter,
    create_problem_in_db,
    delete_problem_from_db,
    get_problem_by_id,
    get_problem_votes,
    get_problem_with_owner,
    increment_view_count,
    update_problem_in_db,
)
from .problem_listing import (
    CursorPagination,
    OffsetPagination,
    PaginationStrategy,
    ProblemPage,
    RpcPagination,
    apply_sort,
    build_problem_filters,
    get_pagination_strategy,
)
from .user_repository import ensure_user_profile, get_users_by_ids
from .vote import add_vote, get_vote, remove_vote

__all__ = [
    "get_engine",
    "get_session",
    "init_db",
    "require_configuration",
    "create_comment_in_db",
    "create_reply_in_db",
    "delete_comment_from_db",
    "get_comment_by_id",
    "list_comments_with_replies",
    "adjust_problem_counter",
    "create_problem_in_db",
    "delete_problem_from_db",
    "get_problem_by_id",
    "get_problem_votes",
    "get_problem_with_owner",
    "increment_view_count",
    "update_problem_in_db",
    "CursorPagination",
    "OffsetPagination",
    "PaginationStrategy",
    "ProblemPage",
    "RpcPagination",
    "apply_sort",
    "build_problem_filters",
    "get_pagination_strategy",
    "ensure_user_profile",
    "get_users_by_ids",
    "add_vote",
    "get_vote",
    "remove_vote",
]
