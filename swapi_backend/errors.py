"""Error taxonomy shared by the favorites core and the catalog client.

Every failure the core can surface belongs to exactly one :class:`ErrorKind`.
Components raise these exceptions and never log or swallow them; the FastAPI
exception handlers in :mod:`swapi_backend.main` translate each kind into a
structured HTTP response.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = [
    "ErrorKind",
    "FavoritesAppError",
    "FieldViolation",
    "StoreError",
    "UpstreamError",
    "ValidationError",
]


class ErrorKind(str, Enum):
    """Closed set of failure categories."""

    VALIDATION = "validation"
    STORE = "store"
    UPSTREAM = "upstream"


@dataclass(frozen=True)
class FieldViolation:
    """A single rule broken by a candidate favorite."""

    field: str
    message: str
    value: Any = None


class FavoritesAppError(Exception):
    """Base class carrying the error kind alongside a readable message."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FavoritesAppError):
    """Candidate favorite violates the shape or ``type`` constraint."""

    kind = ErrorKind.VALIDATION

    def __init__(self, violations: list[FieldViolation]) -> None:
        if not violations:
            raise ValueError("ValidationError requires at least one violation")
        first = violations[0]
        super().__init__(f"{first.field}: {first.message}")
        self.violations = list(violations)


class StoreError(FavoritesAppError):
    """The document store is unreachable, timed out, or rejected a write."""

    kind = ErrorKind.STORE


class UpstreamError(FavoritesAppError):
    """Fetching from the external catalog failed."""

    kind = ErrorKind.UPSTREAM

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
