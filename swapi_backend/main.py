import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from .api import favorites, movies, people
from .db.connection import (
    close_mongo_client,
    create_mongo_client,
    get_favorites_collection,
)
from .errors import ErrorKind, FavoritesAppError
from .schemas.error import ErrorType, ValidationErrorDetail
from .services.catalog_client import CatalogClient
from .services.favorites import FavoritesStore
from .settings import AppSettings, get_settings
from .utils.error_responses import (
    UNPROCESSABLE_STATUS,
    build_app_error_response,
    build_error_response,
    build_validation_error_response,
)
from .utils.request_context import (
    REQUEST_ID_HEADER,
    get_request_id,
    resolve_request_id,
    set_request_id,
)

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level_numeric,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _validate_environment(config: AppSettings | None = None) -> None:
    """Log warnings for optional settings left at their defaults."""
    warnings = (config or get_settings()).optional_config_warnings()

    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning(f"  • {warning}")
        logger.warning("=" * 60)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store and catalog connections once, close them on shutdown."""
    config = get_settings()
    _validate_environment(config)

    logger.info("=" * 60)
    logger.info("SWAPI Favorites API - Preflight Check")
    logger.info("=" * 60)
    logger.info(f"MongoDB URL: {config.sanitized_mongodb_url}")
    logger.info(
        f"Favorites collection: {config.mongodb_database}.{config.mongodb_collection}"
    )
    logger.info(f"Catalog base URL: {config.resolved_catalog_base_url}")
    logger.info("=" * 60)

    mongo_client = create_mongo_client(config)
    http_client = httpx.AsyncClient(follow_redirects=True)

    app.state.favorites_store = FavoritesStore(
        get_favorites_collection(mongo_client, config),
        timeout=config.store_timeout_seconds,
    )
    app.state.catalog_client = CatalogClient(
        http_client,
        base_url=config.resolved_catalog_base_url,
        timeout=config.catalog_timeout_seconds,
    )

    from swapi_backend.warmup import warmup_all

    await warmup_all(mongo_client)

    try:
        yield
    finally:
        logger.info("Shutting down SWAPI Favorites API")
        await http_client.aclose()
        await close_mongo_client(mongo_client)


app = FastAPI(
    title="SWAPI Favorites API",
    version="0.1.0",
    description=(
        "Demo backend for Docker networking: proxies the Star Wars catalog and"
        " keeps a favorites list in MongoDB."
    ),
    lifespan=lifespan,
    redirect_slashes=False,
)


def _default_origins() -> list[str]:
    ports = list(range(3000, 3011)) + [5173]
    origins = []
    for host in ("localhost", "127.0.0.1"):
        origins.extend([f"http://{host}:{port}" for port in ports])
    origins.append("http://localhost")
    origins.append("http://127.0.0.1")
    return origins


def _combine_origins(*origin_groups: list[str]) -> list[str]:
    """Merge origins preserving order and removing duplicates."""
    seen: set[str] = set()
    combined: list[str] = []
    for group in origin_groups:
        for origin in group:
            normalized = origin.rstrip("/")
            if normalized and normalized not in seen:
                seen.add(normalized)
                combined.append(normalized)
    return combined


allow_origins = _combine_origins(_default_origins(), settings.cors_allow_origins)
logger.info("Configured CORS allow_origins: %s", ", ".join(allow_origins))

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Tag each request with an id, reusing one supplied by the caller.

    Unhandled exceptions are rendered here so the 500 response still carries
    the id header.
    """
    request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
    set_request_id(request_id)
    try:
        response = await call_next(request)
    except Exception as exc:
        response = await generic_exception_handler(request, exc)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def _error_details(errors: list[dict]) -> list[ValidationErrorDetail]:
    return [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            value=error.get("input"),
        )
        for error in errors
    ]


# Exception handlers
@app.exception_handler(FavoritesAppError)
async def favorites_app_exception_handler(request: Request, exc: FavoritesAppError):
    """Render validation, store and upstream failures by their error kind."""
    error_response = build_app_error_response(exc, path=str(request.url.path))

    log = logger.warning if exc.kind is ErrorKind.VALIDATION else logger.error
    log(
        "%s error for request %s to %s: %s",
        exc.kind.value.capitalize(),
        get_request_id(),
        request.url.path,
        exc.message,
    )

    headers = None
    if error_response.retry_after is not None:
        headers = {"Retry-After": str(error_response.retry_after)}

    return JSONResponse(
        status_code=error_response.status_code,
        content=error_response.model_dump(mode="json"),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors (missing or malformed bodies)."""
    errors = _error_details(list(exc.errors()))

    logger.warning(
        "Validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(errors),
    )

    error_response = build_validation_error_response(
        message="Request validation failed",
        detail=f"{len(errors)} validation error(s)",
        status_code=UNPROCESSABLE_STATUS,
        path=str(request.url.path),
        errors=errors,
    )

    return JSONResponse(
        status_code=UNPROCESSABLE_STATUS,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_exception_handler(
    request: Request, exc: PydanticValidationError
):
    """Handle catalog or stored records that do not fit the response models."""
    errors = _error_details(list(exc.errors()))

    logger.error(
        "Data validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(errors),
    )

    error_response = build_validation_error_response(
        error_type=ErrorType.INTERNAL_ERROR,
        message="Data validation failed",
        detail=f"{len(errors)} validation error(s)",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        path=str(request.url.path),
        errors=errors,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle all other unhandled exceptions."""
    logger.exception(
        "Unhandled exception for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        type(exc).__name__,
    )

    error_response = build_error_response(
        error_type=ErrorType.INTERNAL_ERROR,
        message="Internal server error",
        detail=f"An unexpected error occurred: {type(exc).__name__}",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        path=str(request.url.path),
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json"),
    )


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    """Simple health endpoint for readiness checks."""
    return {"status": "ok"}


app.include_router(movies.router, prefix="/movies", tags=["catalog"])
app.include_router(people.router, prefix="/people", tags=["catalog"])
app.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
