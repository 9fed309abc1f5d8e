import uuid
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from solvinghub.config import logger
from solvinghub.data.repositories import (
    add_vote,
    ensure_user_profile,
    get_problem_by_id,
    get_problem_votes,
    get_vote,
    remove_vote,
)
from solvinghub.data.schemas import AuthenticatedUser, VoteResponse

vote_logger = logger.getChild("vote")


async def toggle_vote(
    db: AsyncSession, problem_id: uuid.UUID, user: AuthenticatedUser
) -> VoteResponse:
    """
    Removes the caller's vote if present, otherwise adds one. A concurrent
    duplicate insert is reported as voted rather than failing.
    """
    await get_problem_by_id(db, problem_id)
    await ensure_user_profile(db, user)
    await db.commit()

    existing = await get_vote(db, user.id, problem_id)
    if existing:
        if not await remove_vote(db, existing):
            vote_logger.info(f"Vote by {user.id} on {problem_id} was already removed")
        voted = False
    else:
        inserted = await add_vote(db, user.id, problem_id)
        if not inserted:
            vote_logger.info(f"Concurrent vote by {user.id} on {problem_id} treated as existing")
        voted = True

    votes = await get_problem_votes(db, problem_id)
    vote_logger.info(f"User {user.id} voted={voted} on problem {problem_id} (votes={votes})")
    return VoteResponse(voted=voted, votes=votes)


async def get_vote_state(
    db: AsyncSession, problem_id: uuid.UUID, user: Optional[AuthenticatedUser]
) -> VoteResponse:
    if user is None:
        return VoteResponse(voted=False)
    existing = await get_vote(db, user.id, problem_id)
    return VoteResponse(voted=existing is not None)
