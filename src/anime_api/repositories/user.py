"""User (credential) data-access layer."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from anime_api.models import User


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    """Return the user with this username, or None if there is none."""
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def add_user(db: AsyncSession, user: User) -> User:
    db.add(user)
    await db.flush()
    return user
