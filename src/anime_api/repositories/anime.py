"""Anime data-access layer.

Pure query functions — no business logic, no HTTP concerns.
Each function takes a session and returns models or nothing. Writes are
flushed so ids are assigned, never committed; get_db owns the transaction.
"""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from anime_api.models import Anime


async def list_animes(db: AsyncSession) -> list[Anime]:
    """Return every anime ordered by id."""
    result = await db.execute(select(Anime).order_by(Anime.id))
    return list(result.scalars().all())


async def get_anime(db: AsyncSession, anime_id: int) -> Anime | None:
    """Return the anime with the given id, or None."""
    return await db.get(Anime, anime_id)


async def add_anime(db: AsyncSession, anime: Anime) -> Anime:
    """Insert one anime and return it with its assigned id."""
    db.add(anime)
    await db.flush()
    return anime


async def add_animes(db: AsyncSession, animes: Sequence[Anime]) -> list[Anime]:
    """Insert a batch in a single flush, preserving input order."""
    db.add_all(animes)
    await db.flush()
    return list(animes)


async def delete_anime(db: AsyncSession, anime: Anime) -> None:
    await db.delete(anime)
    await db.flush()
