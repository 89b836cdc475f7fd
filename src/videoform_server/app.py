"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that loads the step registry once
  - CORS middleware (the form is usually served from another origin)
  - Global exception handlers (ValueError → 404/400, KeyError → 404)
  - All API routes mounted under ``/api/v1``
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``videoform-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from videoform_db.engine import dispose_engine, get_engine
from videoform_db.repository import SubmissionRepository
from videoform_steps.registry import StepRegistry

from videoform_server.config import ServerSettings, load_settings
from videoform_server.errors import (
    generic_error_handler,
    key_error_handler,
    value_error_handler,
)
from videoform_server.routes import register_routes
from videoform_server.viewer import SubmissionViewer

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan (startup/shutdown)
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load the step registry at startup; release the DB pool on shutdown."""
    settings: ServerSettings = app.state.settings

    registry = StepRegistry(settings.steps_file)
    registry.load()

    app.state.registry = registry
    app.state.repository = SubmissionRepository()
    app.state.viewer = SubmissionViewer()

    yield

    await dispose_engine()
    logger.info("Database engine disposed")


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Build and return the configured FastAPI application."""
    if settings is None:
        settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Video Form API",
        description="Storage and step-registry API for the video form",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(KeyError, key_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    @app.get("/health")
    async def health() -> dict:
        """Readiness probe: checks DB connectivity."""
        try:
            async with get_engine().connect() as conn:
                await conn.execute(text("SELECT 1"))
            return {"status": "ok"}
        except Exception as exc:
            logger.error("Health check failed: %s", exc)
            return {"status": "error", "detail": str(exc)}

    register_routes(app)

    return app


# ------------------------------------------------------------------
# Module-level ASGI export (for uvicorn videoform_server.app:app)
# ------------------------------------------------------------------
app = create_app()


def cli() -> None:
    """Console-script entry point: ``videoform-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "videoform_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
