"""Shared backend fixtures: in-memory collections and catalog payloads."""

from __future__ import annotations

from typing import Any

import pytest

from swapi_backend.services.favorites import FavoritesStore
from tests.backend.support.in_memory_collection import InMemoryCollection

STORE_TIMEOUT = 1.0


@pytest.fixture
def collection() -> InMemoryCollection:
    """Empty favorites collection."""
    return InMemoryCollection()


@pytest.fixture
def store(collection: InMemoryCollection) -> FavoritesStore:
    """Favorites store bound to the in-memory collection."""
    return FavoritesStore(collection, timeout=STORE_TIMEOUT)


@pytest.fixture
def films_payload() -> list[dict[str, Any]]:
    """Two films in the shape served by SWAPI."""
    return [
        {
            "title": "A New Hope",
            "episode_id": 4,
            "director": "George Lucas",
            "producer": "Gary Kurtz, Rick McCallum",
            "release_date": "1977-05-25",
            "url": "https://swapi.dev/api/films/1/",
        },
        {
            "title": "The Empire Strikes Back",
            "episode_id": 5,
            "director": "Irvin Kershner",
            "producer": "Gary Kurtz, Rick McCallum",
            "release_date": "1980-05-17",
            "url": "https://swapi.dev/api/films/2/",
        },
    ]


@pytest.fixture
def people_pages() -> list[dict[str, Any]]:
    """Two pages of the SWAPI ``/people/`` listing."""
    return [
        {
            "count": 3,
            "next": "https://swapi.dev/api/people/?page=2",
            "previous": None,
            "results": [
                {
                    "name": "Luke Skywalker",
                    "gender": "male",
                    "birth_year": "19BBY",
                    "height": "172",
                    "url": "https://swapi.dev/api/people/1/",
                },
                {
                    "name": "C-3PO",
                    "gender": "n/a",
                    "birth_year": "112BBY",
                    "height": "167",
                    "url": "https://swapi.dev/api/people/2/",
                },
            ],
        },
        {
            "count": 3,
            "next": None,
            "previous": "https://swapi.dev/api/people/?page=1",
            "results": [
                {
                    "name": "Leia Organa",
                    "gender": "female",
                    "birth_year": "19BBY",
                    "height": "150",
                    "url": "https://swapi.dev/api/people/5/",
                },
            ],
        },
    ]
