import uuid
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from solvinghub.config import logger
from solvinghub.data.repositories.problem import adjust_problem_counter
from solvinghub.errors import DatabaseException
from solvinghub.storage.models import ProblemVote

vote_logger = logger.getChild("vote_repository")


async def get_vote(
    db: AsyncSession, user_id: uuid.UUID, problem_id: uuid.UUID
) -> Optional[ProblemVote]:
    try:
        result = await db.execute(
            select(ProblemVote).where(
                ProblemVote.user_id == user_id,
                ProblemVote.problem_id == problem_id,
            )
        )
        return result.scalar_one_or_none()
    except Exception as e:
        vote_logger.error(f"Failed to read vote {user_id}/{problem_id}: {str(e)}")
        raise DatabaseException(detail="Failed to read vote", details=str(e))


async def add_vote(db: AsyncSession, user_id: uuid.UUID, problem_id: uuid.UUID) -> bool:
    """
    Inserts a vote and bumps ``problems.votes`` in one transaction.

    Returns False when the unique (user, problem) constraint rejects the
    insert, meaning a concurrent request already recorded this vote.
    """
    try:
        db.add(ProblemVote(user_id=user_id, problem_id=problem_id))
        await db.flush()
    except IntegrityError as e:
        vote_logger.info(f"Vote already exists for {user_id}/{problem_id}: {str(e.orig)}")
        await db.rollback()
        return False

    try:
        await adjust_problem_counter(db, problem_id, "votes", 1)
        await db.commit()
        return True
    except Exception as e:
        vote_logger.error(f"Failed to add vote {user_id}/{problem_id}: {str(e)}")
        await db.rollback()
        raise DatabaseException(detail="Failed to add vote", details=str(e))


async def remove_vote(db: AsyncSession, vote: ProblemVote) -> bool:
    """
    Deletes a vote and decrements ``problems.votes`` in one transaction.

    Returns False when the row was already gone; the counter is then left as is.
    """
    vote_id, problem_id = vote.id, vote.problem_id
    try:
        result = await db.execute(delete(ProblemVote).where(ProblemVote.id == vote_id))
        removed = result.rowcount == 1
        if removed:
            await adjust_problem_counter(db, problem_id, "votes", -1)
        await db.commit()
        return removed
    except Exception as e:
        vote_logger.error(f"Failed to remove vote {vote_id}: {str(e)}")
        await db.rollback()
        raise DatabaseException(detail="Failed to remove vote", details=str(e))
