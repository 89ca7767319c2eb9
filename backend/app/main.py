"""FastAPI application factory and main entry point."""

import logging
import os
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.core.config import get_settings
from app.core.logging import setup_logging
from app.crypto_alerts.application.exceptions import SourceUnavailableError
from app.crypto_alerts.container import build_container
from app.crypto_alerts.presentation.api import alerts, entries, health, subscriptions

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    setup_logging(level="DEBUG" if settings.debug else "INFO")
    logger.info("Crypto Alerts starting up...")
    logger.info(f"Environment: {settings.app_env}")

    container = build_container(settings)
    app.state.container = container
    await container.load_state()

    # Warm the catalog so the first client gets an immediate answer
    try:
        await container.catalog.list()
    except SourceUnavailableError as e:
        logger.warning(f"Initial catalog load failed, will retry on demand: {e.message}")

    container.evaluation_loop.start()

    yield

    # Shutdown
    logger.info("Crypto Alerts shutting down...")
    await container.close()
    await container.persist()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Crypto Alerts",
        description="One-shot push notifications on crypto price conditions",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/api/docs" if settings.is_development else None,
        redoc_url="/api/redoc" if settings.is_development else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API routes
    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(entries.router, prefix="/api", tags=["Entries"])
    app.include_router(alerts.router, prefix="/api", tags=["Alerts"])
    app.include_router(subscriptions.router, prefix="/api", tags=["Subscriptions"])

    # Browser app (if directory exists), mounted last so /api wins
    if os.path.isdir(settings.webapp_dir):
        app.mount("/", StaticFiles(directory=settings.webapp_dir, html=True), name="webapp")

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    tls_files = [path for path in (settings.https_key, settings.https_cert) if path]
    if settings.is_production and (len(tls_files) < 2 or not all(os.path.isfile(p) for p in tls_files)):
        logger.error("HTTPS_KEY and HTTPS_CERT must point to existing files in production")
        sys.exit(1)

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        ssl_keyfile=settings.https_key or None,
        ssl_certfile=settings.https_cert or None,
    )
