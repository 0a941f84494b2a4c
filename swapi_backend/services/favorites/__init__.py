"""Favorites domain components split by responsibility.

The validator enforces the favorite shape before anything is written and the
store wraps the MongoDB collection. :mod:`swapi_backend.services.favorites_service`
wires the two together.
"""

from .store import FavoritesStore, FavoritesStoreProtocol
from .validator import validate_favorite

__all__ = [
    "FavoritesStore",
    "FavoritesStoreProtocol",
    "validate_favorite",
]
