from uuid import UUID
from typing import Dict, Iterable, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from solvinghub.config import logger
from solvinghub.data.schemas import AuthenticatedUser
from solvinghub.errors import DatabaseException
from solvinghub.storage.models import User

user_logger = logger.getChild("user")


async def get_users_by_ids(db: AsyncSession, ids: Iterable[UUID]) -> Dict[UUID, User]:
    """Get users by their IDs, keyed by id. Unknown ids are skipped."""
    ids: List[UUID] = list({i for i in ids})
    if not ids:
        return {}
    try:
        result = await db.execute(select(User).where(User.id.in_(ids)))
        return {user.id: user for user in result.scalars().all()}
    except Exception as e:
        user_logger.error(f"Error retrieving users {ids}: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve users due to database error")


async def ensure_user_profile(db: AsyncSession, auth_user: AuthenticatedUser) -> User:
    """
    Returns the profile row for an authenticated user, adding one built from
    the token claims when it is missing. The caller commits.
    """
    user = await db.get(User, auth_user.id)
    if user:
        return user
    user = User(
        id=auth_user.id,
        email=auth_user.email,
        display_name=auth_user.display_name,
        photo_url=auth_user.photo_url,
    )
    db.add(user)
    await db.flush()
    user_logger.info(f"Created profile for user {auth_user.id}")
    return user
