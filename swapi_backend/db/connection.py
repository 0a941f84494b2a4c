"""MongoDB client lifecycle helpers.

The application opens exactly one :class:`pymongo.AsyncMongoClient` during the
FastAPI lifespan, hands the favorites collection to the store by reference and
closes the client on shutdown. Nothing in this module keeps module-level
connection state.
"""

from __future__ import annotations

import logging
from typing import Any

from pymongo import AsyncMongoClient

from swapi_backend.settings import AppSettings

logger = logging.getLogger(__name__)


def create_mongo_client(settings: AppSettings) -> AsyncMongoClient:
    """Create the async MongoDB client for the configured connection string.

    Server selection and socket timeouts follow ``STORE_TIMEOUT_SECONDS`` so an
    unreachable database fails fast instead of hanging requests. The client
    connects lazily; :func:`swapi_backend.warmup.warmup_store` pings it.
    """

    url = settings.resolved_mongodb_url
    timeout_ms = int(settings.store_timeout_seconds * 1000)
    logger.debug("Creating MongoDB client for %s", settings.sanitized_mongodb_url)
    return AsyncMongoClient(
        url,
        serverSelectionTimeoutMS=timeout_ms,
        connectTimeoutMS=timeout_ms,
        socketTimeoutMS=timeout_ms,
    )


def get_favorites_collection(client: Any, settings: AppSettings) -> Any:
    """Return the favorites collection handle from ``client``."""

    database = client[settings.mongodb_database]
    return database[settings.mongodb_collection]


async def close_mongo_client(client: Any) -> None:
    """Close ``client`` and release its connection pool."""

    await client.close()
    logger.info("MongoDB client closed")


__all__ = ["close_mongo_client", "create_mongo_client", "get_favorites_collection"]
