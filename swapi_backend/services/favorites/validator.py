"""Boundary check applied to every favorite before it reaches the store."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from swapi_backend.errors import FieldViolation, ValidationError
from swapi_backend.schemas.favorites import FavoriteCandidate, FavoriteType

REQUIRED_FIELDS: tuple[str, ...] = ("name", "type", "url")
ALLOWED_TYPES: frozenset[str] = frozenset(member.value for member in FavoriteType)
TYPE_MESSAGE = "type must be movie or character"


def _check_text(field: str, value: Any) -> FieldViolation | None:
    if value is None:
        return FieldViolation(field=field, message=f"{field} is required")
    if not isinstance(value, str):
        return FieldViolation(
            field=field, message=f"{field} must be a string", value=value
        )
    if not value.strip():
        return FieldViolation(
            field=field, message=f"{field} must not be empty", value=value
        )
    return None


def validate_favorite(candidate: Any) -> FavoriteCandidate:
    """Return ``candidate`` as a :class:`FavoriteCandidate` or raise.

    ``name``, ``type`` and ``url`` must be present non-empty strings, and
    ``type`` must equal ``movie`` or ``character`` exactly. Values are never
    trimmed or case-folded. Every violation is collected so callers can report
    them together; unknown keys are dropped.
    """

    if not isinstance(candidate, Mapping):
        raise ValidationError(
            [
                FieldViolation(
                    field="body",
                    message="favorite must be an object with name, type and url",
                    value=candidate,
                )
            ]
        )

    violations: list[FieldViolation] = []
    for field in REQUIRED_FIELDS:
        violation = _check_text(field, candidate.get(field))
        if violation is not None:
            violations.append(violation)

    favorite_type = candidate.get("type")
    type_is_text = isinstance(favorite_type, str) and bool(favorite_type.strip())
    if type_is_text and favorite_type not in ALLOWED_TYPES:
        violations.append(
            FieldViolation(field="type", message=TYPE_MESSAGE, value=favorite_type)
        )

    if violations:
        raise ValidationError(violations)

    return FavoriteCandidate(
        name=candidate["name"],
        type=FavoriteType(favorite_type),
        url=candidate["url"],
    )


__all__ = ["ALLOWED_TYPES", "REQUIRED_FIELDS", "TYPE_MESSAGE", "validate_favorite"]
