from typing import Any, Dict, List, Optional

from solvinghub.data.schemas import ProblemResponse


def next_cursor(problems: List[ProblemResponse], limit: int) -> Optional[Dict[str, Any]]:
    if not problems or len(problems) != limit:
        return None
    last = problems[-1]
    return {"cursor_id": last.id, "cursor_created_at": last.created_at}


def offset_envelope(
    problems: Optional[List[ProblemResponse]], total: Optional[int], limit: int, offset: int
) -> Dict[str, Any]:
    return {
        "problems": problems or [],
        "total": total or 0,
        "limit": limit,
        "offset": offset,
    }


def cursor_envelope(problems: Optional[List[ProblemResponse]], limit: int) -> Dict[str, Any]:
    """
    ``has_more`` is true when the page is full. A last page that happens to
    be exactly ``limit`` long still reports more.
    """
    problems = problems or []
    has_more = len(problems) == limit
    return {
        "problems": problems,
        "pagination": {
            "has_more": has_more,
            "next_cursor": next_cursor(problems, limit) if has_more else None,
            "total_returned": len(problems),
        },
    }
