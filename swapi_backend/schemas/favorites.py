"""Pydantic schemas that power the favorites API surface."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FavoriteType(str, Enum):
    """The two kinds of catalog resource a favorite may point at."""

    MOVIE = "movie"
    CHARACTER = "character"


class FavoriteCandidate(BaseModel):
    """A validated favorite that has not been persisted yet."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Display label for the favorite")
    type: FavoriteType = Field(..., description="Either ``movie`` or ``character``")
    url: str = Field(
        ...,
        min_length=1,
        description="Catalog URL of the underlying resource; never dereferenced.",
    )


class FavoriteItem(FavoriteCandidate):
    """Read model exposed in API responses."""

    id: str = Field(..., min_length=1, description="Store-assigned identifier")
