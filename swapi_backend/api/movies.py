"""FastAPI router proxying the catalog's film listing."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from swapi_backend.schemas.catalog import Movie
from swapi_backend.services.catalog_client import CatalogClient, get_catalog_client

router = APIRouter()


@router.get("", response_model=list[Movie])
async def list_movies(
    client: CatalogClient = Depends(get_catalog_client),
) -> list[Movie]:
    """Return all films known to the catalog."""

    return await client.list_movies()
