import uuid
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from solvinghub.business.services import (
    get_current_user,
    get_optional_user,
    get_vote_state,
    toggle_vote,
)
from solvinghub.config import logger
from solvinghub.data.repositories import get_session, require_configuration
from solvinghub.data.schemas import AuthenticatedUser, VoteResponse

vote_logger = logger.getChild("vote")
vote_router = APIRouter(
    prefix="/problems",
    tags=["votes"],
    dependencies=[Depends(require_configuration)],
)


@vote_router.post(
    "/{problem_id}/vote",
    response_model=VoteResponse,
    summary="Toggle vote",
    description="Adds the caller's vote, or removes it if it already exists.",
)
async def post_vote(
    problem_id: uuid.UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    vote_logger.info(f"Vote toggle by {user.id} on problem {problem_id}")
    return await toggle_vote(db, problem_id, user)


@vote_router.get(
    "/{problem_id}/vote",
    response_model=VoteResponse,
    response_model_exclude_none=True,
    summary="Vote state",
)
async def get_vote(
    problem_id: uuid.UUID,
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_session),
):
    return await get_vote_state(db, problem_id, user)
