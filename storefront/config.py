"""
Static configuration for the storefront search component and the
reference search proxy.

Values come from environment variables (a ``.env`` file is honoured
through ``python-dotenv``). Nothing here is mutated at runtime: build a
``Settings`` once and hand it to the session or the client.
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError


logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = ("http://localhost:3000",)


class ConfigError(ValueError):
    """Raised when required configuration is missing or invalid."""


class Settings(BaseModel):
    """Options recognised by the search component."""

    base_url: str = "http://localhost:8080"
    page_size: int = Field(default=12, ge=1, le=250)
    debounce_ms: int = Field(default=200, ge=0)
    # Typesense treats ``*`` as "match everything"; the first page of
    # the unfiltered catalogue is shown before the user types.
    initial_query: str = "*"
    request_timeout: float = Field(default=10.0, gt=0)

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


class TypesenseSettings(BaseModel):
    """Connection details used by the reference proxy."""

    host: str
    port: str
    api_key: str
    collection: str
    search_by_fields: Optional[str] = None
    cors_origins: List[str] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    timeout: float = 10.0

    @property
    def search_url(self) -> str:
        return f"http://{self.host}:{self.port}/collections/{self.collection}/documents/search"


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def parse_cors_origins(raw: Optional[str]) -> List[str]:
    """Split a comma-separated origin list; blank input gives the default."""
    origins = [o.strip() for o in (raw or "").split(",") if o.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)


def load_settings() -> Settings:
    """Build ``Settings`` from ``STOREFRONT_*`` environment variables."""
    load_dotenv()
    raw = {
        "base_url": _env("STOREFRONT_BASE_URL"),
        "page_size": _env("STOREFRONT_PAGE_SIZE"),
        "debounce_ms": _env("STOREFRONT_DEBOUNCE_MS"),
        "initial_query": os.getenv("STOREFRONT_INITIAL_QUERY"),
        "request_timeout": _env("STOREFRONT_REQUEST_TIMEOUT"),
    }
    try:
        return Settings(**{k: v for k, v in raw.items() if v is not None})
    except ValidationError as exc:
        raise ConfigError(f"Invalid storefront configuration: {exc}") from exc


def load_typesense_settings() -> TypesenseSettings:
    """Build ``TypesenseSettings`` from ``TYPESENSE_*`` environment variables.

    Host, port, API key and collection are mandatory. The search-by
    fields are optional; Typesense falls back to its default fields when
    they are absent.
    """
    load_dotenv()
    required = {
        "host": "TYPESENSE_HOST",
        "port": "TYPESENSE_PORT",
        "api_key": "TYPESENSE_API_KEY",
        "collection": "TYPESENSE_COLLECTION_NAME",
    }
    values = {field: _env(var) for field, var in required.items()}
    missing = [required[field] for field, value in values.items() if value is None]
    if missing:
        raise ConfigError(
            "Missing Typesense environment variables. Please set " + ", ".join(missing) + "."
        )

    search_by_fields = _env("TYPESENSE_SEARCH_BY_FIELDS")
    if search_by_fields is None:
        logger.warning(
            "TYPESENSE_SEARCH_BY_FIELDS is not set. Typesense will use default search fields."
        )

    return TypesenseSettings(
        search_by_fields=search_by_fields,
        cors_origins=parse_cors_origins(_env("STOREFRONT_CORS_ORIGINS")),
        **values,
    )
