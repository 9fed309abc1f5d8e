import uuid
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import case, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from solvinghub.config import logger
from solvinghub.errors import DatabaseException, ResourceNotFoundException
from solvinghub.storage.models import Comment, Problem, ProblemVote, Reply, User, utc_now

problem_logger = logger.getChild("problem_repository")

COUNTER_COLUMNS = {
    "votes": Problem.votes,
    "discussions": Problem.discussions,
    "view_count": Problem.view_count,
}


async def get_problem_by_id(db: AsyncSession, problem_id: uuid.UUID) -> Problem:
    """Fetches a problem or raises ResourceNotFoundException."""
    try:
        problem = await db.get(Problem, problem_id)
    except Exception as e:
        problem_logger.error(f"Failed to fetch problem {problem_id}: {str(e)}")
        raise DatabaseException(detail="Failed to fetch problem", details=str(e))
    if not problem:
        raise ResourceNotFoundException(detail="Problem not found")
    return problem


async def get_problem_with_owner(
    db: AsyncSession, problem_id: uuid.UUID
) -> Tuple[Problem, Optional[User]]:
    try:
        result = await db.execute(
            select(Problem, User)
            .outerjoin(User, User.id == Problem.user_id)
            .where(Problem.id == problem_id)
        )
        row = result.first()
    except Exception as e:
        problem_logger.error(f"Failed to fetch problem {problem_id}: {str(e)}")
        raise DatabaseException(detail="Failed to fetch problem", details=str(e))
    if row is None:
        raise ResourceNotFoundException(detail="Problem not found")
    return row[0], row[1]


async def create_problem_in_db(
    db: AsyncSession, data: Dict[str, Any], user_id: uuid.UUID
) -> Problem:
    try:
        new_problem = Problem(
            id=uuid.uuid4(),
            created_at=utc_now(),
            updated_at=utc_now(),
            status="open",
            votes=0,
            discussions=0,
            view_count=0,
            user_id=user_id,
            **data,
        )
        db.add(new_problem)
        await db.commit()
        await db.refresh(new_problem)
        problem_logger.info(f"Created problem {new_problem.id} for user {user_id}")
        return new_problem
    except Exception as e:
        problem_logger.error(f"Error in create_problem_in_db: {str(e)}", exc_info=True)
        await db.rollback()
        raise DatabaseException(detail="Failed to create problem", details=str(e))


async def update_problem_in_db(
    db: AsyncSession, problem: Problem, changes: Dict[str, Any]
) -> Problem:
    try:
        for key, value in changes.items():
            setattr(problem, key, value)
        problem.updated_at = utc_now()
        db.add(problem)
        await db.commit()
        await db.refresh(problem)
        problem_logger.info(f"Updated problem {problem.id}: {sorted(changes)}")
        return problem
    except Exception as e:
        problem_logger.error(f"Failed to update problem {problem.id}: {str(e)}")
        await db.rollback()
        raise DatabaseException(detail="Failed to update problem", details=str(e))


async def delete_problem_from_db(db: AsyncSession, problem_id: uuid.UUID) -> None:
    """Deletes a problem together with its replies, comments and votes."""
    try:
        await db.execute(delete(Reply).where(Reply.problem_id == problem_id))
        await db.execute(delete(Comment).where(Comment.problem_id == problem_id))
        await db.execute(delete(ProblemVote).where(ProblemVote.problem_id == problem_id))
        await db.execute(delete(Problem).where(Problem.id == problem_id))
        await db.commit()
        problem_logger.info(f"Deleted problem {problem_id}")
    except Exception as e:
        problem_logger.error(f"Failed to delete problem {problem_id}: {str(e)}")
        await db.rollback()
        raise DatabaseException(detail="Failed to delete problem", details=str(e))


async def adjust_problem_counter(
    db: AsyncSession, problem_id: uuid.UUID, counter: str, delta: int
) -> None:
    """
    Adds ``delta`` to a denormalized counter in a single UPDATE, never going
    below zero. Does not commit: it joins the caller's transaction.
    """
    column = COUNTER_COLUMNS[counter]
    await db.execute(
        update(Problem)
        .where(Problem.id == problem_id)
        .values({counter: case((column + delta < 0, 0), else_=column + delta)})
        .execution_options(synchronize_session=False)
    )


async def increment_view_count(db: AsyncSession, problem_id: uuid.UUID) -> None:
    try:
        await adjust_problem_counter(db, problem_id, "view_count", 1)
        await db.commit()
    except Exception as e:
        problem_logger.warning(f"Failed to increment views for {problem_id}: {str(e)}")
        await db.rollback()


async def get_problem_votes(db: AsyncSession, problem_id: uuid.UUID) -> int:
    result = await db.execute(select(Problem.votes).where(Problem.id == problem_id))
    return result.scalar_one_or_none() or 0
