"""
FastAPI application factory.

Mounts the candidate dashboard routes (under the configured dashboard
prefix) and the job, candidate and relation routes, installs CORS and
the error handlers, and prepares the database on startup.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobboard import __version__
from jobboard.data.database import get_database_manager
from jobboard.utils.config import AppSettings, get_settings
from jobboard.utils.logger import get_logger

from .errors import register_exception_handlers
from .routes import applied_jobs, candidates, dashboard, health, jobs, saved_jobs

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Check the store and create indexes on startup; close clients on shutdown."""
    db_manager = get_database_manager()
    if await db_manager.check_async_connection():
        await db_manager.ensure_indexes()
        logger.info("Database connection established")
    else:
        logger.warning("Could not connect to MongoDB. Requests will fail until it is reachable.")

    yield

    db_manager.close_all()
    logger.info("Application shut down")


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """
    Build the HTTP application.

    Args:
        settings: Optional settings, defaults to the global settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.name,
        description=settings.description,
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(dashboard.router, prefix=settings.api.dashboard_prefix)
    app.include_router(saved_jobs.router)
    app.include_router(applied_jobs.router)
    app.include_router(jobs.router)
    app.include_router(candidates.router)
    app.include_router(health.router)

    logger.debug(f"Created {settings.name} app (dashboard prefix '{settings.api.dashboard_prefix}')")
    return app
