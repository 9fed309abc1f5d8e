import json
import uuid
from typing import Union

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from solvinghub.business.services import (
    create_problem,
    delete_problem,
    get_current_user,
    get_owned_problem,
    get_problem,
    list_problems,
    update_problem,
)
from solvinghub.config import logger
from solvinghub.data.repositories import get_session, require_configuration
from solvinghub.data.schemas import (
    AuthenticatedUser,
    CursorListResponse,
    DeleteResponse,
    OffsetListResponse,
    ProblemCreate,
    ProblemEnvelope,
    ProblemUpdate,
)
from solvinghub.errors import BadRequestException

problem_logger = logger.getChild("problem")
problem_router = APIRouter(
    prefix="/problems",
    tags=["problems"],
    dependencies=[Depends(require_configuration)],
)


@problem_router.get(
    "",
    response_model=Union[OffsetListResponse, CursorListResponse],
    summary="List problems",
    description="Filtered, sorted and paginated problem listing.",
)
async def get_problems(
    request: Request,
    db: AsyncSession = Depends(get_session),
):
    """
    Query parameters are parsed leniently: ``limit``, ``offset``,
    ``cursor_id``, ``cursor_created_at``, ``sort_by``, ``category``,
    ``status``, ``search`` and ``user_id``.
    """
    return await list_problems(db, request.query_params)


@problem_router.post(
    "",
    response_model=ProblemEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a problem",
)
async def post_problem(
    problem_data: ProblemCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    problem_logger.info(f"Creating problem for user {user.id}: {problem_data.title!r}")
    problem = await create_problem(db, problem_data, user)
    return {"problem": problem}


@problem_router.get(
    "/{problem_id}",
    response_model=ProblemEnvelope,
    summary="Get a problem",
)
async def get_problem_detail(
    problem_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
):
    """Returns the problem with its owner and counts the view."""
    problem_logger.info(f"Fetching problem ID: {problem_id}")
    return {"problem": await get_problem(db, problem_id)}


@problem_router.patch(
    "/{problem_id}",
    response_model=ProblemEnvelope,
    summary="Update a problem",
    description="Owner only. Ownership is checked before the body is validated.",
)
async def patch_problem(
    problem_id: uuid.UUID,
    request: Request,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    problem = await get_owned_problem(db, problem_id, user, "edit")

    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise BadRequestException(detail="Invalid JSON body")
    if not isinstance(body, dict):
        raise BadRequestException(detail="Request body must be a JSON object")

    problem_update = ProblemUpdate.model_validate(body)
    problem_logger.info(f"Updating problem ID: {problem_id}")
    return {"problem": await update_problem(db, problem, problem_update)}


@problem_router.delete(
    "/{problem_id}",
    response_model=DeleteResponse,
    summary="Delete a problem",
    description="Owner only. Removes the problem's comments, replies and votes.",
)
async def remove_problem(
    problem_id: uuid.UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    problem = await get_owned_problem(db, problem_id, user, "delete")
    problem_logger.info(f"Deleting problem ID: {problem_id}")
    await delete_problem(db, problem)
    return {"success": True}
