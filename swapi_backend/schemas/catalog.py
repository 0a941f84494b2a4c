"""Schemas for records passed through from the external catalog."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class CatalogRecord(BaseModel):
    """Catalog payloads are forwarded unchanged, unknown keys included.

    Known fields are typed ``Any`` so values keep the exact JSON type the
    catalog sent; nothing is coerced or rejected.
    """

    model_config = ConfigDict(extra="allow")

    url: Any = None


class Movie(CatalogRecord):
    """A film as listed by the catalog's ``/films/`` resource."""

    title: Any = None
    episode_id: Any = None
    director: Any = None
    producer: Any = None
    release_date: Any = None


class Character(CatalogRecord):
    """A person as listed by the catalog's ``/people/`` resource."""

    name: Any = None
    gender: Any = None
    birth_year: Any = None
    homeworld: Any = None
