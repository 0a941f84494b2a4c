"""Centralized configuration management for the SWAPI favorites backend."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from urllib.parse import urlsplit

from dotenv import load_dotenv
from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables defined in a local .env file before instantiating the
# settings singleton so every consumer of :mod:`swapi_backend.settings` observes
# the same values regardless of import order.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_MONGODB_URL = "mongodb://localhost:27017"
DEFAULT_MONGODB_DATABASE = "swapi"
DEFAULT_MONGODB_COLLECTION = "favorites"
MONGODB_SCHEMES = ("mongodb://", "mongodb+srv://")
DEFAULT_STORE_TIMEOUT_SECONDS = 5.0
DEFAULT_CATALOG_BASE_URL = "https://swapi.dev/api"
DEFAULT_CATALOG_TIMEOUT_SECONDS = 10.0
DEFAULT_LOG_LEVEL = "INFO"


def _normalize_origin(origin: str) -> str:
    """Return the origin stripped of whitespace and trailing slashes."""

    return origin.strip().rstrip("/")


def sanitize_mongodb_url(url: str) -> str:
    """Mask the password component of a MongoDB connection string for logs."""

    if "://" not in url:
        return url

    scheme, rest = url.split("://", 1)
    if "@" not in rest:
        return url

    auth, host = rest.rsplit("@", 1)
    if ":" in auth:
        user, _ = auth.split(":", 1)
        return f"{scheme}://{user}:***@{host}"
    return f"{scheme}://{auth}@{host}"


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    Values come from the process environment (and a local ``.env`` file). The
    MongoDB connection string is the only setting the favorites store needs;
    the remaining fields tune timeouts, CORS and logging.
    """

    _explicit_mongodb_url: bool = PrivateAttr(default=False)
    _explicit_cors_allow_origins: bool = PrivateAttr(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def __init__(self, **values: object) -> None:
        """Capture explicit overrides prior to delegating to ``BaseSettings``."""

        normalized_keys = {str(key).lower() for key in values}
        super().__init__(**values)
        self._explicit_mongodb_url = "mongodb_url" in normalized_keys
        self._explicit_cors_allow_origins = (
            "cors_allow_origins_raw" in normalized_keys
            or "cors_allow_origins" in normalized_keys
        )
        mongodb_env = os.getenv("MONGODB_URL")
        if mongodb_env is not None and mongodb_env.strip():
            self._explicit_mongodb_url = True
        cors_env = os.getenv("CORS_ALLOW_ORIGINS")
        if cors_env is not None and cors_env.strip():
            self._explicit_cors_allow_origins = True

    mongodb_url: str = Field(
        default=DEFAULT_MONGODB_URL,
        alias="MONGODB_URL",
        description=(
            "MongoDB connection string. Inside Docker this usually points at the"
            " database container by name or at host.docker.internal."
        ),
    )
    mongodb_database: str = Field(
        default=DEFAULT_MONGODB_DATABASE,
        alias="MONGODB_DATABASE",
        description="Database holding the favorites collection.",
    )
    mongodb_collection: str = Field(
        default=DEFAULT_MONGODB_COLLECTION,
        alias="MONGODB_COLLECTION",
        description="Collection name for persisted favorites.",
    )
    store_timeout_seconds: float = Field(
        default=DEFAULT_STORE_TIMEOUT_SECONDS,
        alias="STORE_TIMEOUT_SECONDS",
        gt=0,
        description="Upper bound applied to every favorites store call.",
    )
    catalog_base_url: str = Field(
        default=DEFAULT_CATALOG_BASE_URL,
        alias="CATALOG_BASE_URL",
        description="Root URL of the read-only movie/character catalog.",
    )
    catalog_timeout_seconds: float = Field(
        default=DEFAULT_CATALOG_TIMEOUT_SECONDS,
        alias="CATALOG_TIMEOUT_SECONDS",
        gt=0,
        description="Upper bound applied to every catalog request.",
    )
    cors_allow_origins_raw: str | None = Field(
        default=None,
        alias="CORS_ALLOW_ORIGINS",
        description=(
            "Comma-separated list of additional CORS origins supplied via environment variable."
        ),
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )

    @property
    def resolved_mongodb_url(self) -> str:
        """Return the validated MongoDB connection string."""

        url = self.mongodb_url.strip()
        if not url:
            raise RuntimeError(
                "MONGODB_URL is set but empty. Provide a valid MongoDB connection string."
            )

        if not url.startswith(MONGODB_SCHEMES):
            raise RuntimeError(
                "MONGODB_URL must use the MongoDB scheme. "
                "Expected a URL beginning with 'mongodb://' or 'mongodb+srv://'."
            )

        if not urlsplit(url).netloc:
            raise RuntimeError(
                "MONGODB_URL appears malformed. Verify the host is present."
            )

        return url

    @property
    def sanitized_mongodb_url(self) -> str:
        """Return the connection string with credentials masked."""

        return sanitize_mongodb_url(self.mongodb_url)

    @property
    def resolved_catalog_base_url(self) -> str:
        """Return the catalog root without a trailing slash."""

        return self.catalog_base_url.strip().rstrip("/")

    @property
    def cors_allow_origins(self) -> list[str]:
        """Return normalised CORS origins supplied via environment variables."""

        if not self.cors_allow_origins_raw:
            return []

        origins = [
            _normalize_origin(origin)
            for origin in self.cors_allow_origins_raw.split(",")
            if origin.strip()
        ]
        return [origin for origin in origins if origin]

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []

        if not self._explicit_mongodb_url and self.mongodb_url == DEFAULT_MONGODB_URL:
            warnings.append(
                "MONGODB_URL is not set - connecting to mongodb://localhost:27017 "
                "(inside a container this is the container itself, not the host)"
            )

        if not self._explicit_cors_allow_origins and not self.cors_allow_origins:
            warnings.append(
                "CORS_ALLOW_ORIGINS is not set - using default localhost origins only"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_CATALOG_BASE_URL",
    "DEFAULT_CATALOG_TIMEOUT_SECONDS",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_MONGODB_COLLECTION",
    "DEFAULT_MONGODB_DATABASE",
    "DEFAULT_MONGODB_URL",
    "DEFAULT_STORE_TIMEOUT_SECONDS",
    "MONGODB_SCHEMES",
    "get_settings",
    "sanitize_mongodb_url",
]
