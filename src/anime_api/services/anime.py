"""Anime business logic.

Enforces the non-empty name invariant before anything reaches the store and
owns the single "Anime not found" failure that update and delete reuse.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from anime_api.exceptions import InvalidNameError, NotFoundError
from anime_api.logging import get_logger
from anime_api.models import Anime
from anime_api.repositories.anime import (
    add_anime,
    add_animes,
    delete_anime,
    get_anime,
    list_animes,
)

logger = get_logger(__name__)


def _is_valid_name(name: str | None) -> bool:
    return bool(name and name.strip())


def _validate_name(anime: Anime) -> None:
    if not _is_valid_name(anime.name):
        logger.warning("invalid_name_rejected", anime_id=anime.id)
        raise InvalidNameError()


async def find_all(db: AsyncSession) -> list[Anime]:
    return await list_animes(db)


async def find_by_id(db: AsyncSession, anime_id: int) -> Anime:
    """Return the anime or raise NotFoundError."""
    anime = await get_anime(db, anime_id)
    if anime is None:
        raise NotFoundError()
    return anime


async def save(db: AsyncSession, anime: Anime) -> Anime:
    _validate_name(anime)
    saved = await add_anime(db, anime)
    logger.info("anime_created", anime_id=saved.id)
    return saved


async def save_all(db: AsyncSession, animes: list[Anime]) -> list[Anime]:
    """Persist a batch, all or nothing.

    Every name is checked before the first insert, so a rejected batch never
    touches the store and the caller never sees a partially persisted result.
    """
    invalid = [position for position, anime in enumerate(animes) if not _is_valid_name(anime.name)]
    if invalid:
        logger.warning("invalid_name_rejected", positions=invalid, batch_size=len(animes))
        raise InvalidNameError()

    saved = await add_animes(db, animes)
    logger.info("animes_created", count=len(saved))
    return saved


async def update(db: AsyncSession, anime: Anime) -> None:
    """Replace the stored anime with ``anime`` (matched by id)."""
    stored = await find_by_id(db, anime.id)
    _validate_name(anime)
    stored.name = anime.name
    await db.flush()
    logger.info("anime_updated", anime_id=stored.id)


async def delete(db: AsyncSession, anime_id: int) -> None:
    stored = await find_by_id(db, anime_id)
    await delete_anime(db, stored)
    logger.info("anime_deleted", anime_id=anime_id)
