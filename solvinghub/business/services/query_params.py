"""
Lenient parsing of the problem listing query string.

Malformed values fall back to defaults instead of failing the request.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping, Optional

from solvinghub.config import Config
from solvinghub.data.schemas.enums import ProblemCategory, ProblemStatus, SortField

MAX_SEARCH_LENGTH = 200

# sort_by value -> (column, descending)
SORT_ALIASES = {
    "votes": (SortField.VOTES, True),
    "discussions": (SortField.DISCUSSIONS, True),
    "most-discussed": (SortField.DISCUSSIONS, True),
    "most_discussed": (SortField.DISCUSSIONS, True),
    "views": (SortField.VIEWS, True),
    "view_count": (SortField.VIEWS, True),
    "created_at": (SortField.CREATED_AT, True),
    "newest": (SortField.CREATED_AT, True),
    "timestamp": (SortField.CREATED_AT, True),
    "title": (SortField.TITLE, False),
    "alphabetical": (SortField.TITLE, False),
}

_CATEGORIES = {c.value.lower(): c.value for c in ProblemCategory}
_STATUSES = {s.value for s in ProblemStatus}


@dataclass
class ProblemQuery:
    limit: int
    offset: int = 0
    sort_field: SortField = SortField.CREATED_AT
    descending: bool = True
    category: Optional[str] = None
    status: Optional[str] = None
    search: Optional[str] = None
    user_id: Optional[uuid.UUID] = None
    cursor_id: Optional[uuid.UUID] = None
    cursor_created_at: Optional[datetime] = None


def clamp_limit(value, default: int, maximum: int) -> int:
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return default
    return max(1, min(limit, maximum))


def parse_offset(value) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


def parse_uuid(value) -> Optional[uuid.UUID]:
    if not value:
        return None
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def parse_timestamp(value) -> Optional[datetime]:
    """ISO-8601 to an aware UTC datetime. Values without an offset are taken as UTC."""
    if not value:
        return None
    raw = str(value).strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_sort(value):
    key = (value or "").strip().lower()
    return SORT_ALIASES.get(key, (SortField.CREATED_AT, True))


def parse_category(value) -> Optional[str]:
    key = (value or "").strip()
    if not key or key.lower() == "all":
        return None
    return _CATEGORIES.get(key.lower(), key)


def parse_status(value) -> Optional[str]:
    key = (value or "").strip().lower()
    if not key or key == "all":
        return None
    return key if key in _STATUSES else None


def parse_search(value) -> Optional[str]:
    term = (value or "").strip()[:MAX_SEARCH_LENGTH]
    return term or None


def parse_problem_query(params: Mapping[str, str]) -> ProblemQuery:
    sort_field, descending = parse_sort(params.get("sort_by"))
    cursor_id = parse_uuid(params.get("cursor_id"))
    cursor_created_at = parse_timestamp(params.get("cursor_created_at"))
    if not (cursor_id and cursor_created_at):
        cursor_id, cursor_created_at = None, None

    return ProblemQuery(
        limit=clamp_limit(params.get("limit"), Config.DEFAULT_PAGE_LIMIT, Config.MAX_PAGE_LIMIT),
        offset=parse_offset(params.get("offset")),
        sort_field=sort_field,
        descending=descending,
        category=parse_category(params.get("category")),
        status=parse_status(params.get("status")),
        search=parse_search(params.get("search")),
        user_id=parse_uuid(params.get("user_id")),
        cursor_id=cursor_id,
        cursor_created_at=cursor_created_at,
    )
