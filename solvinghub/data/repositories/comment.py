import uuid
from collections import defaultdict
from typing import Dict, List, Tuple

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from solvinghub.config import logger
from solvinghub.data.repositories.problem import adjust_problem_counter
from solvinghub.errors import DatabaseException, ResourceNotFoundException
from solvinghub.storage.models import Comment, Reply, utc_now

comment_logger = logger.getChild("comment_repository")


async def get_comment_by_id(db: AsyncSession, comment_id: uuid.UUID) -> Comment:
    try:
        comment = await db.get(Comment, comment_id)
    except Exception as e:
        comment_logger.error(f"Failed to fetch comment {comment_id}: {str(e)}")
        raise DatabaseException(detail="Failed to fetch comment", details=str(e))
    if not comment:
        raise ResourceNotFoundException(detail="Comment not found")
    return comment


async def list_comments_with_replies(
    db: AsyncSession, problem_id: uuid.UUID
) -> Tuple[List[Comment], Dict[uuid.UUID, List[Reply]]]:
    """Comments newest first, and their replies oldest first grouped by comment id."""
    try:
        result = await db.execute(
            select(Comment)
            .where(Comment.problem_id == problem_id)
            .order_by(Comment.created_at.desc())
        )
        comments = list(result.scalars().all())

        replies_by_comment: Dict[uuid.UUID, List[Reply]] = defaultdict(list)
        if comments:
            result = await db.execute(
                select(Reply)
                .where(Reply.comment_id.in_([c.id for c in comments]))
                .order_by(Reply.created_at.asc())
            )
            for reply in result.scalars().all():
                replies_by_comment[reply.comment_id].append(reply)
        return comments, replies_by_comment
    except Exception as e:
        comment_logger.error(f"Failed to fetch comments for {problem_id}: {str(e)}")
        raise DatabaseException(detail="Failed to fetch comments", details=str(e))


async def create_comment_in_db(
    db: AsyncSession, problem_id: uuid.UUID, user_id: uuid.UUID, text: str
) -> Comment:
    try:
        comment = Comment(
            problem_id=problem_id,
            user_id=user_id,
            text=text,
            created_at=utc_now(),
            updated_at=utc_now(),
        )
        db.add(comment)
        await adjust_problem_counter(db, problem_id, "discussions", 1)
        await db.commit()
        await db.refresh(comment)
        comment_logger.info(f"Created comment {comment.id} on problem {problem_id}")
        return comment
    except Exception as e:
        comment_logger.error(f"Failed to create comment on {problem_id}: {str(e)}")
        await db.rollback()
        raise DatabaseException(detail="Failed to create comment", details=str(e))


async def create_reply_in_db(
    db: AsyncSession, comment: Comment, user_id: uuid.UUID, text: str
) -> Reply:
    problem_id = comment.problem_id
    try:
        reply = Reply(
            comment_id=comment.id,
            problem_id=problem_id,
            user_id=user_id,
            text=text,
            created_at=utc_now(),
            updated_at=utc_now(),
        )
        db.add(reply)
        await adjust_problem_counter(db, problem_id, "discussions", 1)
        await db.commit()
        await db.refresh(reply)
        comment_logger.info(f"Created reply {reply.id} on comment {comment.id}")
        return reply
    except Exception as e:
        comment_logger.error(f"Failed to create reply on {comment.id}: {str(e)}")
        await db.rollback()
        raise DatabaseException(detail="Failed to create reply", details=str(e))


async def delete_comment_from_db(db: AsyncSession, comment: Comment) -> None:
    """
    Deletes a comment and its replies. The discussion counter drops by the
    number of rows actually removed.
    """
    comment_id, problem_id = comment.id, comment.problem_id
    try:
        replies = await db.execute(delete(Reply).where(Reply.comment_id == comment_id))
        comments = await db.execute(delete(Comment).where(Comment.id == comment_id))
        removed = (comments.rowcount or 0) + (replies.rowcount or 0)
        if removed:
            await adjust_problem_counter(db, problem_id, "discussions", -removed)
        await db.commit()
        comment_logger.info(f"Deleted comment {comment_id}: {removed} rows removed")
    except Exception as e:
        comment_logger.error(f"Failed to delete comment {comment_id}: {str(e)}")
        await db.rollback()
        raise DatabaseException(detail="Failed to delete comment", details=str(e))
