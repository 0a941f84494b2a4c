"""Business logic powering the favorites API endpoints.

:class:`FavoritesService` is the single entry point for favorite-related
operations. It validates candidates with
:func:`~swapi_backend.services.favorites.validate_favorite` and delegates
persistence to an injected store implementing
:class:`~swapi_backend.services.favorites.FavoritesStoreProtocol`.

Errors are not caught here: ``ValidationError`` is raised before the store is
touched, and ``StoreError`` travels up from the store unchanged.
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends, Request

from swapi_backend.schemas.favorites import FavoriteItem
from swapi_backend.services.favorites import (
    FavoritesStoreProtocol,
    validate_favorite,
)


class FavoritesService:
    """Orchestrates validation and persistence of favorites."""

    def __init__(self, store: FavoritesStoreProtocol) -> None:
        self._store = store

    async def add_favorite(self, candidate: Any) -> FavoriteItem:
        validated = validate_favorite(candidate)
        return await self._store.insert(validated)

    async def get_favorites(self) -> list[FavoriteItem]:
        return await self._store.list_all()


def get_favorites_store(request: Request) -> FavoritesStoreProtocol:
    """Return the store opened during application startup."""

    return request.app.state.favorites_store


def get_favorites_service(
    store: FavoritesStoreProtocol = Depends(get_favorites_store),
) -> FavoritesService:
    """FastAPI dependency that wires the orchestrator together."""

    return FavoritesService(store)


__all__ = ["FavoritesService", "get_favorites_service", "get_favorites_store"]
