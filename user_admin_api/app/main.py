"""
Main entrypoint for the User Admin API.

This module assembles the FastAPI application: it sets up logging,
binds the database, registers the error handlers and includes the
versioned routers.  ``create_app`` builds and configures the app, which
is then instantiated at module import time as ``app``, e.g.::

    uvicorn user_admin_api.app.main:app --reload

Every application owns its engine and session factory (kept on
``app.state``), so tests can build an app bound to a throwaway
database with ``create_app(database_url=...)``.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import build_engine, build_session_factory, init_db
from .core.errors import UserServiceError, error_payload
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database_url: Optional[str] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use instead of the ones read from the environment.
    database_url : Optional[str]
        Overrides ``settings.database_url``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    if database_url is not None:
        settings = replace(settings, database_url=database_url)

    # Initialise logging before anything else so that the setup below
    # can safely log messages.
    setup_logging(settings.log_level, settings.log_file, sql_echo=settings.sql_echo)

    engine = build_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(engine)
        yield
        engine.dispose()

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # ``/api`` is the canonical mount point; ``/api/v1`` exposes the same
    # routes for clients that pin the version explicitly.
    app.include_router(v1_router, prefix="/api")
    app.include_router(v1_router, prefix="/api/v1")

    @app.exception_handler(UserServiceError)
    async def handle_service_error(_: Request, exc: UserServiceError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        details = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        logger.warning("Malformed request to %s %s: %s", request.method, request.url.path, details)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_payload("bad_request", details),
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.exception("Database failure while handling %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_payload("internal_error", ["The database could not complete the request."]),
        )

    @app.get("/health", tags=["health"])
    def health() -> dict:
        return {"status": "ok"}

    return app


# Create the application instance at import time so that ASGI servers
# can find it as ``user_admin_api.app.main:app``.
app = create_app()
