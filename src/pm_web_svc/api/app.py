"""FastAPI application for the pm_web_svc API.

This module creates and configures the FastAPI application instance with
all routes, error handlers, and the database handle whose lifetime matches
the application's.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__, config
from ..database import Database
from ..routes import (
    board_template_router,
    kanban_router,
    portfolio_router,
    program_router,
    project_router,
    task_router,
    user_kanban_router,
    user_router,
)
from .errors import register_exception_handlers

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from LOG_LEVEL."""
    logging.basicConfig(
        level=level or config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(database: Database | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        database: Database handle to serve requests from. When None, one is
                  created from DATABASE_URL at startup and disposed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = database is None
        db_handle = database if database is not None else Database()
        if config.DB_AUTO_CREATE:
            db_handle.create_all()
        app.state.database = db_handle
        logger.info(f"Database ready: {db_handle!r}")
        try:
            yield
        finally:
            if owned:
                db_handle.dispose()
            logger.info("Database handle released")

    app = FastAPI(
        title="PM Web Service API",
        description="REST API for portfolios, programs, projects, tasks and kanban boards",
        version=__version__,
        lifespan=lifespan,
    )

    if database is not None:
        app.state.database = database

    register_exception_handlers(app)

    # Include routers with API prefix
    for router in (
        user_router,
        portfolio_router,
        program_router,
        project_router,
        task_router,
        board_template_router,
        kanban_router,
        user_kanban_router,
    ):
        app.include_router(router, prefix="/api")

    @app.get("/health")
    def health_check(request: Request):
        """Health check endpoint reporting database connectivity."""
        if request.app.state.database.check_connection():
            return {"status": "healthy", "database": "connected"}
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "disconnected"},
        )

    return app


app = create_app()
