# storefront/main.py
import logging
import os
import sys
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .catalog.router import router as search_router
from .catalog.typesense import TypesenseSearch
from .config import TypesenseSettings, load_typesense_settings, parse_cors_origins


load_dotenv()


def configure_logging() -> logging.Logger:
    """Send log records to stdout at ``LOG_LEVEL`` (default INFO)."""
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # Reduce noise from verbose libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    return logging.getLogger(__name__)


logger = configure_logging()


def create_app(
    settings: Optional[TypesenseSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the proxy app.

    With explicit ``settings`` the Typesense client is created right
    away; otherwise it is configured from the environment on startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "typesense", None) is None:
            app.state.typesense = TypesenseSearch(load_typesense_settings(), transport=transport)
        logger.info("Search proxy ready (collection %s)", app.state.typesense.settings.collection)
        yield
        await app.state.typesense.aclose()

    app = FastAPI(
        title="Storefront search proxy",
        description="Forwards catalog searches from the storefront to Typesense.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.typesense = TypesenseSearch(settings, transport=transport) if settings else None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=(
            settings.cors_origins if settings else parse_cors_origins(os.getenv("STOREFRONT_CORS_ORIGINS"))
        ),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-TYPESENSE-API-KEY"],
        max_age=86400,
    )

    # Liveness check
    @app.get("/")
    def health_check():
        return {"status": "ok", "message": "Storefront search proxy live"}

    app.include_router(search_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host="0.0.0.0",
        port=int(os.getenv("APP_PORT", "8080")),
        log_level="info",
    )
