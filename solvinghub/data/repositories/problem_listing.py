"""
Query construction for the problem listing.

Filters and ordering are built once and shared by the pagination
strategies. A strategy is picked by name from configuration:

* ``offset`` - LIMIT/OFFSET with a best-effort total count
* ``cursor`` - keyset pagination on (created_at, id)
* ``rpc``    - server-side paginated function, degrading to ``cursor``
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, func, or_, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from solvinghub.config import logger
from solvinghub.data.schemas.enums import SortField
from solvinghub.errors import DatabaseException
from solvinghub.storage.models import Problem

listing_logger = logger.getChild("problem_listing")

SORT_COLUMNS = {
    SortField.VOTES: Problem.votes,
    SortField.DISCUSSIONS: Problem.discussions,
    SortField.VIEWS: Problem.view_count,
    SortField.CREATED_AT: Problem.created_at,
    SortField.TITLE: Problem.title,
}

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


@dataclass
class ProblemPage:
    problems: List[Problem] = field(default_factory=list)
    style: str = "offset"
    limit: int = 20
    offset: int = 0
    total: int = 0


def escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_problem_filters(query) -> list:
    """WHERE clauses for category, status, owner and free-text search."""
    filters = []
    if query.category:
        filters.append(Problem.category == query.category)
    if query.status:
        filters.append(Problem.status == query.status)
    if query.user_id:
        filters.append(Problem.user_id == query.user_id)
    if query.search:
        pattern = f"%{escape_like(query.search)}%"
        filters.append(
            or_(
                Problem.title.ilike(pattern, escape="\\"),
                Problem.description.ilike(pattern, escape="\\"),
            )
        )
    return filters


def apply_sort(stmt, sort_field: SortField, descending: bool = True):
    column = SORT_COLUMNS.get(sort_field, Problem.created_at)
    primary = column.desc() if descending else column.asc()
    if column is Problem.created_at:
        return stmt.order_by(primary, Problem.id.desc())
    return stmt.order_by(primary, Problem.created_at.desc(), Problem.id.desc())


class PaginationStrategy:
    name = "base"

    async def fetch(self, db: AsyncSession, query) -> ProblemPage:
        raise NotImplementedError


class OffsetPagination(PaginationStrategy):
    name = "offset"

    async def count(self, db: AsyncSession, filters: list) -> int:
        try:
            result = await db.execute(
                select(func.count()).select_from(Problem).where(*filters)
            )
            return int(result.scalar_one() or 0)
        except Exception as e:
            listing_logger.warning(f"Problem count unavailable: {str(e)}")
            await db.rollback()
            return 0

    async def fetch(self, db: AsyncSession, query) -> ProblemPage:
        filters = build_problem_filters(query)
        total = await self.count(db, filters)
        stmt = apply_sort(select(Problem).where(*filters), query.sort_field, query.descending)
        stmt = stmt.offset(query.offset).limit(query.limit)
        try:
            result = await db.execute(stmt)
            problems = list(result.scalars().all())
        except Exception as e:
            listing_logger.error(f"Failed to list problems: {str(e)}")
            raise DatabaseException(detail="Failed to fetch problems", details=str(e))
        return ProblemPage(
            problems=problems,
            style="offset",
            limit=query.limit,
            offset=query.offset,
            total=total,
        )


class CursorPagination(PaginationStrategy):
    """Keyset pagination, newest first. Other sort orders are not applied."""

    name = "cursor"

    async def fetch(self, db: AsyncSession, query) -> ProblemPage:
        filters = build_problem_filters(query)
        if query.cursor_id and query.cursor_created_at:
            filters.append(
                or_(
                    Problem.created_at < query.cursor_created_at,
                    and_(
                        Problem.created_at == query.cursor_created_at,
                        Problem.id < query.cursor_id,
                    ),
                )
            )
        if query.sort_field is not SortField.CREATED_AT:
            listing_logger.debug(
                f"Cursor pagination ignores sort_by={query.sort_field.value}"
            )
        stmt = apply_sort(select(Problem).where(*filters), SortField.CREATED_AT)
        stmt = stmt.limit(query.limit)
        try:
            result = await db.execute(stmt)
            problems = list(result.scalars().all())
        except Exception as e:
            listing_logger.error(f"Failed to list problems by cursor: {str(e)}")
            raise DatabaseException(detail="Failed to fetch problems", details=str(e))
        return ProblemPage(problems=problems, style="cursor", limit=query.limit)


class RpcPagination(PaginationStrategy):
    """
    Calls a paginated stored function. The function is not present in
    every deployment, so any error from it falls back to keyset pagination.
    The call runs inside a SAVEPOINT and a failure only rolls that back.
    """

    name = "rpc"

    def __init__(self, function_name: str, fallback: Optional[PaginationStrategy] = None):
        if not _IDENTIFIER.match(function_name):
            raise ValueError(f"Invalid function name: {function_name!r}")
        self.function_name = function_name
        self.fallback = fallback or CursorPagination()

    def params(self, query) -> Dict[str, Any]:
        return {
            "p_limit": query.limit,
            "p_cursor_id": str(query.cursor_id) if query.cursor_id else None,
            "p_cursor_created_at": query.cursor_created_at,
            "p_category": query.category,
            "p_status": query.status,
            "p_search": query.search,
            "p_sort_by": query.sort_field.value,
        }

    async def fetch(self, db: AsyncSession, query) -> ProblemPage:
        stmt = text(
            f"SELECT * FROM {self.function_name}("
            ":p_limit, :p_cursor_id, :p_cursor_created_at, "
            ":p_category, :p_status, :p_search, :p_sort_by)"
        )
        try:
            async with db.begin_nested():
                result = await db.execute(stmt, self.params(query))
                rows = result.mappings().all()
        except Exception as e:
            listing_logger.warning(
                f"RPC {self.function_name} failed, falling back to {self.fallback.name}: {str(e)}"
            )
            return await self.fallback.fetch(db, query)

        columns = set(Problem.model_fields)
        problems = [Problem(**{k: v for k, v in row.items() if k in columns}) for row in rows]
        return ProblemPage(problems=problems, style="cursor", limit=query.limit)


def get_pagination_strategy(name: str, rpc_name: str = "get_problems_paginated") -> PaginationStrategy:
    name = (name or "").lower()
    if name == "cursor":
        return CursorPagination()
    if name == "rpc":
        return RpcPagination(rpc_name)
    if name != "offset":
        listing_logger.warning(f"Unknown pagination strategy {name!r}, using offset")
    return OffsetPagination()
