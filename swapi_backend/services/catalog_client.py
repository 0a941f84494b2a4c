"""Read-only client for the external movie/character catalog (SWAPI).

The client is a pass-through: it neither caches nor retries. Any failure to
obtain a decodable listing surfaces as :class:`UpstreamError`.
"""

from __future__ import annotations

from typing import Any, TypeVar

import httpx
from fastapi import Request

from swapi_backend.errors import UpstreamError
from swapi_backend.schemas.catalog import CatalogRecord, Character, Movie

FILMS_RESOURCE = "films"
PEOPLE_RESOURCE = "people"

_RecordT = TypeVar("_RecordT", bound=CatalogRecord)


def _parse_records(model: type[_RecordT], records: list[dict[str, Any]]) -> list[_RecordT]:
    return [model.model_validate(record) for record in records]


class CatalogClient:
    """Fetches film and people listings over a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        base_url: str,
        timeout: float,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def list_movies(self) -> list[Movie]:
        records = await self._list_resource(FILMS_RESOURCE)
        return _parse_records(Movie, records)

    async def list_characters(self) -> list[Character]:
        records = await self._list_resource(PEOPLE_RESOURCE)
        return _parse_records(Character, records)

    async def _list_resource(self, resource: str) -> list[dict[str, Any]]:
        """Collect ``results`` across every page of a listing resource.

        SWAPI pages carry a ``next`` URL; a bare JSON array is accepted as a
        complete, unpaginated listing.
        """

        url: str | None = f"{self._base_url}/{resource}/"
        visited: set[str] = set()
        records: list[dict[str, Any]] = []

        while url and url not in visited:
            visited.add(url)
            payload = await self._get_json(url)

            if isinstance(payload, list):
                records.extend(payload)
                break
            if not isinstance(payload, dict) or not isinstance(
                payload.get("results"), list
            ):
                raise UpstreamError(
                    f"Catalog returned an unexpected payload for {resource}"
                )

            records.extend(payload["results"])
            url = payload.get("next") or None

        for record in records:
            if not isinstance(record, dict):
                raise UpstreamError(
                    f"Catalog returned a non-object {resource} record"
                )
        return records

    async def _get_json(self, url: str) -> Any:
        try:
            response = await self._http.get(url, timeout=self._timeout)
        except httpx.TimeoutException as exc:
            raise UpstreamError(
                f"Catalog request to {url} timed out after {self._timeout}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Catalog request to {url} failed: {exc}") from exc

        if response.is_error:
            raise UpstreamError(
                f"Catalog responded with HTTP {response.status_code} for {url}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(f"Catalog returned invalid JSON for {url}") from exc


def get_catalog_client(request: Request) -> CatalogClient:
    """FastAPI dependency returning the client created at startup."""

    return request.app.state.catalog_client


__all__ = ["CatalogClient", "get_catalog_client"]
