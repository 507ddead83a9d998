"""
Main entrypoint for the Todo API.

This module assembles the FastAPI application, sets up logging,
installs the error handlers and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn todo_api.app.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import STATUS_BY_KIND, ErrorKind, TodoApiError, ValidationFailed
from .core.logging_config import setup_logging
from .services.user_service import password_alphabet


logger = logging.getLogger(__name__)


async def handle_todo_api_error(request: Request, exc: TodoApiError) -> JSONResponse:
    headers = None
    if exc.kind == ErrorKind.UNAUTHENTICATED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        {"detail": exc.detail, "kind": exc.kind.value},
        status_code=STATUS_BY_KIND[exc.kind],
        headers=headers,
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await handle_todo_api_error(request, ValidationFailed(jsonable_encoder(exc.errors())))


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    setup_logging()

    # Fail here rather than on every /users request.
    password_alphabet(settings.generated_password_charset)
    if settings.generated_password_charset == "legacy_range":
        logger.warning(
            "Generated passwords use the legacy '0'..'z' range, which includes punctuation"
        )

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.add_exception_handler(TodoApiError, handle_todo_api_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and applies migrations.
        init_db()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
