"""Tests for MongoDB client helpers and the startup warmup."""

from __future__ import annotations

from typing import Any

import pytest

from swapi_backend.db.connection import create_mongo_client, get_favorites_collection
from swapi_backend.settings import AppSettings
from swapi_backend.warmup import warmup_store


class _Admin:
    def __init__(self, error: Exception | None) -> None:
        self._error = error
        self.commands: list[str] = []

    async def command(self, name: str) -> dict[str, Any]:
        self.commands.append(name)
        if self._error is not None:
            raise self._error
        return {"ok": 1.0}


class _Client:
    def __init__(self, error: Exception | None = None) -> None:
        self.admin = _Admin(error)


@pytest.mark.asyncio
async def test_warmup_pings_the_server() -> None:
    client = _Client()

    assert await warmup_store(client) is True
    assert client.admin.commands == ["ping"]


@pytest.mark.asyncio
async def test_warmup_failure_does_not_raise() -> None:
    assert await warmup_store(_Client(ConnectionError("refused"))) is False


def test_favorites_collection_uses_configured_names() -> None:
    settings = AppSettings(mongodb_database="demo", mongodb_collection="faves")
    client = {"demo": {"faves": "collection-handle"}}

    assert get_favorites_collection(client, settings) == "collection-handle"


def test_create_mongo_client_rejects_non_mongodb_urls() -> None:
    with pytest.raises(RuntimeError):
        create_mongo_client(AppSettings(mongodb_url="redis://localhost:6379/0"))
