"""Helper functions for constructing structured API error responses.

Exception handlers in :mod:`swapi_backend.main` build every error body through
these helpers so payloads share one shape: request id, timezone-aware
timestamp and, for favorites failures, the status code chosen by error kind.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from fastapi import status

from swapi_backend.errors import (
    ErrorKind,
    FavoritesAppError,
    FieldViolation,
    UpstreamError,
    ValidationError,
)
from swapi_backend.schemas.error import (
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from swapi_backend.utils.request_context import get_request_id

UNPROCESSABLE_STATUS = 422

__all__ = [
    "ErrorMapping",
    "build_app_error_response",
    "build_error_response",
    "build_validation_error_response",
    "mapping_for",
    "violations_to_details",
    "UNPROCESSABLE_STATUS",
]


@dataclass(frozen=True)
class ErrorMapping:
    """How one :class:`ErrorKind` is rendered over HTTP."""

    error_type: ErrorType
    status_code: int
    message: str
    retry_after: int | None = None


_KIND_MAPPINGS: dict[ErrorKind, ErrorMapping] = {
    ErrorKind.VALIDATION: ErrorMapping(
        error_type=ErrorType.VALIDATION_ERROR,
        status_code=UNPROCESSABLE_STATUS,
        message="Favorite validation failed",
    ),
    ErrorKind.STORE: ErrorMapping(
        error_type=ErrorType.DATABASE_ERROR,
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        message="Favorites store unavailable",
        retry_after=5,
    ),
    ErrorKind.UPSTREAM: ErrorMapping(
        error_type=ErrorType.UPSTREAM_ERROR,
        status_code=status.HTTP_502_BAD_GATEWAY,
        message="Catalog request failed",
        retry_after=3,
    ),
}


def mapping_for(kind: ErrorKind) -> ErrorMapping:
    """Return the HTTP rendering for ``kind``."""

    return _KIND_MAPPINGS[kind]


def _current_timestamp() -> datetime:
    """Return a timezone-aware timestamp; tests monkeypatch this."""

    return datetime.now(UTC)


def violations_to_details(
    violations: Sequence[FieldViolation],
) -> list[ValidationErrorDetail]:
    """Convert core field violations into response detail models."""

    return [
        ValidationErrorDetail(
            field=violation.field,
            message=violation.message,
            value=violation.value,
        )
        for violation in violations
    ]


def build_validation_error_response(
    *,
    errors: Sequence[ValidationErrorDetail],
    message: str,
    detail: str,
    status_code: int,
    path: str,
    error_type: ErrorType = ErrorType.VALIDATION_ERROR,
    request_id: str | None = None,
) -> ValidationErrorResponse:
    """Construct a ``ValidationErrorResponse`` enriched with metadata."""

    return ValidationErrorResponse(
        error_type=error_type,
        message=message,
        detail=detail,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=request_id or get_request_id(),
        path=path,
        errors=list(errors),
    )


def build_error_response(
    *,
    error_type: ErrorType,
    message: str,
    detail: str,
    status_code: int,
    path: str,
    retry_after: int | None = None,
    request_id: str | None = None,
) -> ErrorResponse:
    """Construct a generic ``ErrorResponse`` enriched with metadata."""

    return ErrorResponse(
        error_type=error_type,
        message=message,
        detail=detail,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=request_id or get_request_id(),
        path=path,
        retry_after=retry_after,
    )


def build_app_error_response(
    exc: FavoritesAppError,
    *,
    path: str,
    request_id: str | None = None,
) -> ErrorResponse:
    """Render any :class:`FavoritesAppError` according to its kind.

    Validation failures list every violated rule; upstream failures mention the
    catalog's status code when one was received.
    """

    mapping = mapping_for(exc.kind)

    if isinstance(exc, ValidationError):
        return build_validation_error_response(
            errors=violations_to_details(exc.violations),
            message=mapping.message,
            detail=exc.message,
            status_code=mapping.status_code,
            path=path,
            error_type=mapping.error_type,
            request_id=request_id,
        )

    detail = exc.message
    if isinstance(exc, UpstreamError) and exc.status_code is not None:
        detail = f"{detail} (upstream status {exc.status_code})"

    return build_error_response(
        error_type=mapping.error_type,
        message=mapping.message,
        detail=detail,
        status_code=mapping.status_code,
        path=path,
        retry_after=mapping.retry_after,
        request_id=request_id,
    )
