"""Pydantic schemas for API responses."""

from swapi_backend.schemas.catalog import (  # noqa: F401
    CatalogRecord,
    Character,
    Movie,
)
from swapi_backend.schemas.error import (  # noqa: F401
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from swapi_backend.schemas.favorites import (  # noqa: F401
    FavoriteCandidate,
    FavoriteItem,
    FavoriteType,
)
