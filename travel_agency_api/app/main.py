"""
Main entrypoint for the Travel Agency API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  ``create_app`` builds and configures the
app from a ``Settings`` object; ``app`` is created at import time from
the environment so it can be served directly, e.g.::

    uvicorn travel_agency_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import Settings
from .core.db import Database
from .core.exceptions import StoreError
from .core.logging_config import setup_logging
from .services.catalog_service import CatalogService
from .services.enrollment_service import EnrollmentService


logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies and parameters as 400 Bad Request."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def store_exception_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("Store failure while handling %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "The data store is currently unavailable."},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  When omitted it is read from the
        environment with ``Settings.from_env()``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    db = Database(settings)
    app.state.settings = settings
    app.state.db = db
    app.state.enrollment_service = EnrollmentService(db)
    app.state.catalog_service = CatalogService(db)

    app.include_router(v1_router, prefix="/api/v1")
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StoreError, store_exception_handler)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and brings the schema up to date.
        db.init_db()

    return app


app = create_app()
