"""Error Handlers: global exception handlers for the Users API.

Invariants:
    - UsersApiError → {"error": message} with status from http_status_for()
    - DATABASE-category errors increment the metrics error counter exactly once
    - Unmatched path or method (Starlette 404/405) → 404 {"error": "Not found"}
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (UsersApiError), routing (HTTPException),
      catch-all (Exception)
    - Log level follows error severity: store failures at error, client
      mistakes at warning, unknown routes at info
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from users_api.core.errors import (
    UsersApiError, RouteNotFoundError, ErrorSeverity,
)

logger = logging.getLogger(__name__)

_LOG_LEVEL_BY_SEVERITY = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_users_api_error_handler(app)
    _register_http_exception_handler(app)
    _register_generic_error_handler(app)


def build_error_response(request: Request, exc: UsersApiError) -> JSONResponse:
    """Log, count and render a UsersApiError."""
    cause = f" ({exc.__cause__})" if exc.__cause__ else ""
    logger.log(
        _LOG_LEVEL_BY_SEVERITY[exc.severity],
        f"{exc.code}: {exc}{cause}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    if exc.counts_as_error:
        request.app.state.metrics.record_error()
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(),
    )


def _register_users_api_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(UsersApiError)
    async def users_api_error_handler(request: Request, exc: UsersApiError):
        return build_error_response(request, exc)


def _register_http_exception_handler(app: FastAPI) -> None:
    """Register routing error handler (no route, wrong method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return build_error_response(
                request, RouteNotFoundError(request.method, request.url.path),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=exc.headers,
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        request.app.state.metrics.record_error()
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
