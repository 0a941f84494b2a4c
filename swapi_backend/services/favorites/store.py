"""MongoDB-backed persistence for favorites."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Mapping
from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import PyMongoError

from swapi_backend.errors import StoreError
from swapi_backend.schemas.favorites import FavoriteCandidate, FavoriteItem

_T = TypeVar("_T")


@runtime_checkable
class FavoritesStoreProtocol(Protocol):
    async def insert(self, candidate: FavoriteCandidate) -> FavoriteItem:
        ...

    async def list_all(self) -> list[FavoriteItem]:
        ...


def document_to_item(document: Mapping[str, Any]) -> FavoriteItem:
    """Convert a raw collection document into the API read model."""

    return FavoriteItem(
        id=str(document["_id"]),
        name=document["name"],
        type=document["type"],
        url=document["url"],
    )


class FavoritesStore:
    """Encapsulates the collection operations required by the favorites domain.

    The collection handle is injected (an ``AsyncCollection`` from
    :class:`pymongo.AsyncMongoClient` in production) so the store never owns a
    connection. Each call is bounded by ``timeout`` seconds; driver failures and
    timeouts are surfaced as :class:`StoreError`.
    """

    def __init__(self, collection: Any, *, timeout: float) -> None:
        self._collection = collection
        self._timeout = timeout

    async def _bounded(self, operation: str, awaitable: Awaitable[_T]) -> _T:
        """Await a driver call, raising :class:`StoreError` on failure or timeout.

        A timeout only abandons the wait: an ``insert_one`` the server already
        committed stays persisted even though the caller sees ``StoreError``.
        """

        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout)
        except TimeoutError as exc:
            raise StoreError(
                f"Timed out after {self._timeout}s waiting for the favorites store"
                f" ({operation})"
            ) from exc
        except PyMongoError as exc:
            raise StoreError(f"Favorites store {operation} failed: {exc}") from exc

    async def insert(self, candidate: FavoriteCandidate) -> FavoriteItem:
        """Persist one favorite as a single document and return it with its id."""

        document: dict[str, Any] = {
            "name": candidate.name,
            "type": candidate.type.value,
            "url": candidate.url,
        }
        result = await self._bounded("insert", self._collection.insert_one(document))
        if not getattr(result, "acknowledged", True):
            raise StoreError("Favorites store did not acknowledge the insert")
        return FavoriteItem(
            id=str(result.inserted_id),
            name=candidate.name,
            type=candidate.type,
            url=candidate.url,
        )

    async def list_all(self) -> list[FavoriteItem]:
        """Return every persisted favorite in the collection's natural order."""

        cursor = self._collection.find({})
        documents = await self._bounded("list", cursor.to_list(length=None))
        try:
            return [document_to_item(document) for document in documents]
        except (KeyError, PydanticValidationError) as exc:
            raise StoreError(
                f"Favorites store returned a malformed document: {exc!r}"
            ) from exc


__all__ = ["FavoritesStore", "FavoritesStoreProtocol", "document_to_item"]
