"""FastAPI router exposing the favorites list."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from swapi_backend.schemas.favorites import FavoriteItem
from swapi_backend.services.favorites_service import (
    FavoritesService,
    get_favorites_service,
)

router = APIRouter()

_FAVORITE_EXAMPLE = {
    "name": "A New Hope",
    "type": "movie",
    "url": "https://swapi.dev/api/films/1/",
}


@router.get("", response_model=list[FavoriteItem])
async def list_favorites(
    service: FavoritesService = Depends(get_favorites_service),
) -> list[FavoriteItem]:
    """Return every stored favorite."""

    return await service.get_favorites()


@router.post(
    "",
    response_model=FavoriteItem,
    status_code=status.HTTP_201_CREATED,
)
async def add_favorite(
    payload: Any = Body(
        ...,
        description="Favorite to store: ``name``, ``type`` (movie or character) and ``url``.",
        examples=[_FAVORITE_EXAMPLE],
    ),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteItem:
    """Validate and store a favorite, returning it with its new id."""

    return await service.add_favorite(payload)
