"""Tests for the SWAPI catalog client using ``httpx.MockTransport``."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from swapi_backend.errors import ErrorKind, UpstreamError
from swapi_backend.schemas.catalog import Character, Movie
from swapi_backend.services.catalog_client import CatalogClient

BASE_URL = "https://swapi.dev/api"


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> CatalogClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CatalogClient(http_client, base_url=f"{BASE_URL}/", timeout=2.0)


@pytest.mark.asyncio
async def test_list_movies_returns_results(films_payload: list[dict[str, Any]]) -> None:
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(
            200,
            json={"count": 2, "next": None, "previous": None, "results": films_payload},
        )

    movies = await _client(handler).list_movies()

    assert requested == [f"{BASE_URL}/films/"]
    assert [movie.title for movie in movies] == ["A New Hope", "The Empire Strikes Back"]
    assert all(isinstance(movie, Movie) for movie in movies)
    assert movies[0].model_dump()["producer"] == "Gary Kurtz, Rick McCallum"


@pytest.mark.asyncio
async def test_list_characters_follows_next_links(
    people_pages: list[dict[str, Any]],
) -> None:
    pages = {
        f"{BASE_URL}/people/": people_pages[0],
        f"{BASE_URL}/people/?page=2": people_pages[1],
    }

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=pages[str(request.url)])

    characters = await _client(handler).list_characters()

    assert [c.name for c in characters] == ["Luke Skywalker", "C-3PO", "Leia Organa"]
    assert all(isinstance(c, Character) for c in characters)
    assert characters[0].model_dump()["height"] == "172"


@pytest.mark.asyncio
async def test_bare_list_payload_is_accepted(films_payload: list[dict[str, Any]]) -> None:
    client = _client(lambda request: httpx.Response(200, json=films_payload))

    movies = await client.list_movies()

    assert len(movies) == 2


@pytest.mark.asyncio
async def test_http_error_status_raises_upstream_error() -> None:
    client = _client(lambda request: httpx.Response(503, text="maintenance"))

    with pytest.raises(UpstreamError) as excinfo:
        await client.list_movies()

    assert excinfo.value.kind is ErrorKind.UPSTREAM
    assert excinfo.value.status_code == 503


@pytest.mark.asyncio
async def test_connection_failure_raises_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Name or service not known", request=request)

    with pytest.raises(UpstreamError) as excinfo:
        await _client(handler).list_characters()

    assert excinfo.value.status_code is None


@pytest.mark.asyncio
async def test_timeout_raises_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamError, match="timed out"):
        await _client(handler).list_movies()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"detail": "Not found"}),
        httpx.Response(200, json={"results": ["A New Hope"]}),
    ],
)
async def test_unexpected_payloads_raise_upstream_error(response: httpx.Response) -> None:
    with pytest.raises(UpstreamError):
        await _client(lambda request: response).list_movies()


@pytest.mark.asyncio
async def test_record_values_are_not_coerced() -> None:
    record = {
        "title": "A New Hope",
        "episode_id": "4",
        "director": None,
        "release_date": 19770525,
        "characters": ["https://swapi.dev/api/people/1/"],
    }
    client = _client(lambda request: httpx.Response(200, json={"results": [record]}))

    movies = await client.list_movies()

    assert movies[0].episode_id == "4"
    assert movies[0].model_dump() == {**record, "url": None, "producer": None}


@pytest.mark.asyncio
async def test_unusual_record_values_do_not_fail_the_listing() -> None:
    record = {"name": "R2-D2", "birth_year": 33, "homeworld": None, "gender": ["n/a"]}
    client = _client(lambda request: httpx.Response(200, json=[record]))

    characters = await client.list_characters()

    assert characters[0].birth_year == 33
    assert characters[0].gender == ["n/a"]
