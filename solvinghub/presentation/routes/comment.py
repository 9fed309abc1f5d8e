import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from solvinghub.business.services import (
    add_comment,
    add_reply,
    delete_comment,
    get_current_user,
    list_comments,
)
from solvinghub.config import logger
from solvinghub.data.repositories import get_session, require_configuration
from solvinghub.data.schemas import (
    AuthenticatedUser,
    CommentCreate,
    CommentEnvelope,
    CommentListResponse,
    DeleteResponse,
    ReplyCreate,
    ReplyEnvelope,
)

comment_logger = logger.getChild("comment")
comment_router = APIRouter(
    tags=["comments"],
    dependencies=[Depends(require_configuration)],
)


@comment_router.get(
    "/problems/{problem_id}/comments",
    response_model=CommentListResponse,
    summary="List comments",
    description="Comments newest first, each with its replies oldest first.",
)
async def get_comments(
    problem_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
):
    return {"comments": await list_comments(db, problem_id)}


@comment_router.post(
    "/problems/{problem_id}/comments",
    response_model=CommentEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a problem",
)
async def post_comment(
    problem_id: uuid.UUID,
    comment_data: CommentCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    comment_logger.info(f"New comment by {user.id} on problem {problem_id}")
    return {"comment": await add_comment(db, problem_id, comment_data, user)}


@comment_router.post(
    "/comments/{comment_id}/replies",
    response_model=ReplyEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Reply to a comment",
)
async def post_reply(
    comment_id: uuid.UUID,
    reply_data: ReplyCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    comment_logger.info(f"New reply by {user.id} on comment {comment_id}")
    return {"reply": await add_reply(db, comment_id, reply_data, user)}


@comment_router.delete(
    "/comments/{comment_id}",
    response_model=DeleteResponse,
    summary="Delete a comment",
    description="Comment owner only. Replies are removed with it.",
)
async def remove_comment(
    comment_id: uuid.UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    comment_logger.info(f"Deleting comment {comment_id} by {user.id}")
    await delete_comment(db, comment_id, user)
    return {"success": True}
