"""Error Handlers: global exception handlers for the Choreboard API.

Invariants:
    - NotFoundError → 404 envelope naming the missing resource id
    - PersistenceError → 503 envelope naming the failed operation, with Retry-After
    - Any other ChoreboardError → structured JSON with error code, message, severity
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → 500, never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from choreboard.core.errors import (
    ChoreboardError, ErrorSeverity, NotFoundError, PersistenceError,
)

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = 1


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_not_found_handler(app)
    _register_persistence_error_handler(app)
    _register_choreboard_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_not_found_handler(app: FastAPI) -> None:

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        logger.info(
            f"{exc.resource_type} not found: {exc.resource_id}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content=exc.to_response(),
        )


def _register_persistence_error_handler(app: FastAPI) -> None:

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError):
        """Store unavailable or statement rejected: the client may retry."""
        logger.error(
            f"PersistenceError: {exc.message}",
            extra={
                "error_code": exc.code,
                "operation": exc.operation,
                "path": request.url.path,
            },
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=exc.to_response(),
            headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
        )


def _register_choreboard_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ChoreboardError)
    async def choreboard_error_handler(request: Request, exc: ChoreboardError):
        """Remaining Choreboard errors (bootstrap, internal)."""
        logger.error(
            f"ChoreboardError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
