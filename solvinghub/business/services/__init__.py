from .auth_dependency import BearerToken, get_current_user, get_optional_user
from .auth_util import decode_token
from .discussion import add_comment, add_reply, delete_comment, list_comments
from .envelope import cursor_envelope, offset_envelope
from .problem import (
    calculate_quality_score,
    create_problem,
    delete_problem,
    get_owned_problem,
    get_problem,
    list_problems,
    update_problem,
)
from .query_params import ProblemQuery, parse_problem_query
from .sanitize import escape_html, sanitize_problem_data, sanitize_text, strip_html
from .vote import get_vote_state, toggle_vote

__all__ = [
    "BearerToken",
    "get_current_user",
    "get_optional_user",
    "decode_token",
    "add_comment",
    "add_reply",
    "delete_comment",
    "list_comments",
    "cursor_envelope",
    "offset_envelope",
    "calculate_quality_score",
    "create_problem",
    "delete_problem",
    "get_owned_problem",
    "get_problem",
    "list_problems",
    "update_problem",
    "ProblemQuery",
    "parse_problem_query",
    "escape_html",
    "sanitize_problem_data",
    "sanitize_text",
    "strip_html",
    "get_vote_state",
    "toggle_vote",
]
