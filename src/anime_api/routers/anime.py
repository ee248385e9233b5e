"""Anime endpoints.

Handlers carry no authorization checks; AuthorizationMiddleware has already run for
every request by the time one is called.
"""

from fastapi import APIRouter, Response

from anime_api.dependencies import DB
from anime_api.models import Anime
from anime_api.schemas.anime import AnimeRequest, AnimeResponse
from anime_api.services import anime as anime_service

router = APIRouter(prefix="/records", tags=["records"])


@router.get("", response_model=list[AnimeResponse], status_code=200)
async def list_all(db: DB) -> list[Anime]:
    return await anime_service.find_all(db)


@router.get("/{anime_id}", response_model=AnimeResponse, status_code=200)
async def find_by_id(anime_id: int, db: DB) -> Anime:
    return await anime_service.find_by_id(db, anime_id)


@router.post("", response_model=AnimeResponse, status_code=201)
async def save(payload: AnimeRequest, db: DB) -> Anime:
    return await anime_service.save(db, Anime(name=payload.name))


@router.post("/batch", response_model=list[AnimeResponse], status_code=201)
async def save_batch(payload: list[AnimeRequest], db: DB) -> list[Anime]:
    """Create several animes at once; one invalid name rejects the whole batch."""
    return await anime_service.save_all(db, [Anime(name=item.name) for item in payload])


@router.put("/{anime_id}", status_code=204, response_class=Response)
async def update(anime_id: int, payload: AnimeRequest, db: DB) -> None:
    await anime_service.update(db, Anime(id=anime_id, name=payload.name))


@router.delete("/{anime_id}", status_code=204, response_class=Response)
async def delete(anime_id: int, db: DB) -> None:
    await anime_service.delete(db, anime_id)
