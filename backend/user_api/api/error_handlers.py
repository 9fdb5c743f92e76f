"""Error Handlers — global exception handlers for the user API.

Invariants:
    - UserServiceError → its http_status with {"error": message}
    - Framework 405 (verb outside the route's method list) → the same body the
      dispatcher renders for unsupported methods; other HTTP errors pass through
    - Exception (catch-all) → 500 {"error": "internal error"}, never leaks internal details
    - Every body built here goes through ErrorBody

Design Decisions:
    - The dispatcher already renders every operation outcome; these handlers cover
      failures outside it (routing, dependency wiring, store not initialized)
    - Extracted from main.py (ADR: ExMA import fan-out < 10)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from user_api.core.errors import MethodNotAllowedError, UserServiceError
from user_api.schemas.user import ErrorBody

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_user_service_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _error_response(exc: UserServiceError, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=ErrorBody(error=exc.message).to_response(),
        headers=headers,
    )


def _register_user_service_error_handler(app: FastAPI) -> None:
    """Register user service domain error handler."""

    @app.exception_handler(UserServiceError)
    async def user_service_error_handler(request: Request, exc: UserServiceError):
        logger.error(
            f"UserServiceError: {exc.message}",
            extra={"error_code": exc.code, "http_method": request.method},
        )
        return _error_response(exc)


def _register_http_error_handler(app: FastAPI) -> None:
    """Register framework HTTP error handler (routing-level 405)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code != status.HTTP_405_METHOD_NOT_ALLOWED:
            return await http_exception_handler(request, exc)
        error = MethodNotAllowedError(request.method)
        logger.warning(
            f"{request.method} failed: {error.message}",
            extra={
                "http_method": request.method,
                "error_code": error.code,
                "status_code": error.http_status,
            },
        )
        return _error_response(error, headers=getattr(exc, "headers", None))


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorBody(error="internal error").to_response(),
        )
