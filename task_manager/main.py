"""
Main FastAPI application.

This is the entry point for the API server.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from task_manager.core.config import Settings, settings as default_settings
from task_manager.core.jwt import SessionIssuer
from task_manager.core.logging import configure_logging
from task_manager.db.session import Database
from task_manager.errors import register_error_handlers
from task_manager.routers import auth, health, task

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application and everything it depends on.

    Args:
        settings: Configuration; defaults to the environment-loaded settings
        database: Pre-built persistence client; one is created from
            settings.DATABASE_URL when omitted
    """
    settings = settings or default_settings
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup: prepare the schema when AUTO_CREATE_TABLES is set.
        Shutdown: release pooled connections.
        """
        logger.info("Starting %s (%s)", settings.APP_NAME, settings.ENVIRONMENT)
        if settings.AUTO_CREATE_TABLES:
            await app.state.db.create_all()

        yield

        logger.info("Shutting down %s", settings.APP_NAME)
        await app.state.db.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="REST API for a multi-user task manager",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db = database or Database(settings.DATABASE_URL, echo=settings.DEBUG)
    app.state.issuer = SessionIssuer.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    register_error_handlers(app)

    # Include routers (API endpoints)
    app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])
    app.include_router(auth.router, prefix=API_PREFIX)
    app.include_router(task.router, prefix=API_PREFIX)

    return app


app = create_app()


def main():
    """Run the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        "task_manager.main:app",
        host="0.0.0.0",
        port=5000,
        reload=default_settings.is_development,
    )


if __name__ == "__main__":
    main()
