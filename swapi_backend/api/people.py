"""FastAPI router proxying the catalog's character listing."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from swapi_backend.schemas.catalog import Character
from swapi_backend.services.catalog_client import CatalogClient, get_catalog_client

router = APIRouter()


@router.get("", response_model=list[Character])
async def list_people(
    client: CatalogClient = Depends(get_catalog_client),
) -> list[Character]:
    """Return all characters known to the catalog."""

    return await client.list_characters()
