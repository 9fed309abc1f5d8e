import uuid
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from solvinghub.business.services.sanitize import sanitize_text
from solvinghub.config import logger
from solvinghub.data.repositories import (
    create_comment_in_db,
    create_reply_in_db,
    delete_comment_from_db,
    ensure_user_profile,
    get_comment_by_id,
    get_problem_by_id,
    get_users_by_ids,
    list_comments_with_replies,
)
from solvinghub.data.schemas import (
    AuthenticatedUser,
    CommentCreate,
    CommentResponse,
    ReplyCreate,
    ReplyResponse,
    UserSummary,
)
from solvinghub.errors import AuthorizationException, ValidationException

discussion_logger = logger.getChild("discussion")


def _clean(text: str, label: str) -> str:
    cleaned = sanitize_text(text)
    if not cleaned:
        raise ValidationException(
            details=[{"field": "text", "message": f"{label} cannot be empty", "code": "empty_after_sanitize"}]
        )
    return cleaned


async def list_comments(db: AsyncSession, problem_id: uuid.UUID) -> List[CommentResponse]:
    comments, replies_by_comment = await list_comments_with_replies(db, problem_id)
    author_ids = [c.user_id for c in comments] + [
        r.user_id for replies in replies_by_comment.values() for r in replies
    ]
    authors = await get_users_by_ids(db, author_ids)

    def author(user_id):
        user = authors.get(user_id)
        return UserSummary.model_validate(user) if user else None

    responses = []
    for comment in comments:
        response = CommentResponse.model_validate(comment)
        response.user = author(comment.user_id)
        response.replies = []
        for reply in replies_by_comment.get(comment.id, []):
            reply_response = ReplyResponse.model_validate(reply)
            reply_response.user = author(reply.user_id)
            response.replies.append(reply_response)
        responses.append(response)
    return responses


async def add_comment(
    db: AsyncSession, problem_id: uuid.UUID, payload: CommentCreate, user: AuthenticatedUser
) -> CommentResponse:
    await get_problem_by_id(db, problem_id)
    text = _clean(payload.text, "Comment")
    profile = await ensure_user_profile(db, user)
    comment = await create_comment_in_db(db, problem_id, user.id, text)
    response = CommentResponse.model_validate(comment)
    response.user = UserSummary.model_validate(profile)
    response.replies = []
    return response


async def add_reply(
    db: AsyncSession, comment_id: uuid.UUID, payload: ReplyCreate, user: AuthenticatedUser
) -> ReplyResponse:
    comment = await get_comment_by_id(db, comment_id)
    text = _clean(payload.text, "Reply")
    profile = await ensure_user_profile(db, user)
    reply = await create_reply_in_db(db, comment, user.id, text)
    response = ReplyResponse.model_validate(reply)
    response.user = UserSummary.model_validate(profile)
    return response


async def delete_comment(
    db: AsyncSession, comment_id: uuid.UUID, user: AuthenticatedUser
) -> None:
    comment = await get_comment_by_id(db, comment_id)
    if comment.user_id != user.id:
        discussion_logger.warning(f"User {user.id} tried to delete comment {comment_id}")
        raise AuthorizationException(
            detail="Forbidden: You can only delete your own comments"
        )
    await delete_comment_from_db(db, comment)
