"""Collection doubles standing in for ``pymongo`` async collections."""

from __future__ import annotations

import asyncio
from typing import Any

from bson import ObjectId
from pymongo.errors import AutoReconnect, ServerSelectionTimeoutError
from pymongo.results import InsertOneResult


class InMemoryCursor:
    """Mimics the ``to_list`` surface of ``AsyncCursor``."""

    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        if length is None:
            return list(self._documents)
        return list(self._documents[:length])


class InMemoryCollection:
    """Stores documents in a list and assigns ``ObjectId`` values like the driver."""

    def __init__(self) -> None:
        self.documents: list[dict[str, Any]] = []

    async def insert_one(self, document: dict[str, Any]) -> InsertOneResult:
        document.setdefault("_id", ObjectId())
        self.documents.append(dict(document))
        return InsertOneResult(document["_id"], acknowledged=True)

    def find(self, filter: dict[str, Any] | None = None) -> InMemoryCursor:
        return InMemoryCursor([dict(document) for document in self.documents])


class _FailingCursor:
    def __init__(self, error: Exception) -> None:
        self._error = error

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        raise self._error


class UnreachableCollection(InMemoryCollection):
    """Collection whose server can no longer be selected."""

    def __init__(self) -> None:
        super().__init__()
        self.error = ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")

    async def insert_one(self, document: dict[str, Any]) -> InsertOneResult:
        raise self.error

    def find(self, filter: dict[str, Any] | None = None) -> _FailingCursor:
        return _FailingCursor(self.error)


class DroppingCollection(InMemoryCollection):
    """Accepts writes until ``drop_connection`` is called, then fails every call."""

    def __init__(self) -> None:
        super().__init__()
        self.connected = True

    def drop_connection(self) -> None:
        self.connected = False

    async def insert_one(self, document: dict[str, Any]) -> InsertOneResult:
        if not self.connected:
            raise AutoReconnect("connection closed")
        return await super().insert_one(document)

    def find(self, filter: dict[str, Any] | None = None) -> InMemoryCursor | _FailingCursor:
        if not self.connected:
            return _FailingCursor(AutoReconnect("connection closed"))
        return super().find(filter)


class SlowCollection(InMemoryCollection):
    """Collection that takes ``delay`` seconds to answer each call."""

    def __init__(self, delay: float) -> None:
        super().__init__()
        self.delay = delay

    async def insert_one(self, document: dict[str, Any]) -> InsertOneResult:
        await asyncio.sleep(self.delay)
        return await super().insert_one(document)

    def find(self, filter: dict[str, Any] | None = None) -> InMemoryCursor:
        collection = self

        class _SlowCursor(InMemoryCursor):
            async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
                await asyncio.sleep(collection.delay)
                return await super().to_list(length)

        return _SlowCursor([dict(document) for document in self.documents])


class LateAckCollection(InMemoryCollection):
    """Commits each insert at once but acknowledges it only after ``delay`` seconds."""

    def __init__(self, delay: float) -> None:
        super().__init__()
        self.delay = delay

    async def insert_one(self, document: dict[str, Any]) -> InsertOneResult:
        result = await super().insert_one(document)
        await asyncio.sleep(self.delay)
        return result
