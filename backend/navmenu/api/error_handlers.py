"""Error Handlers - global exception handlers for the menu items API.

Invariants:
    - NavMenuError -> structured JSON with code, message, severity, http_status
    - RequestValidationError -> 400 rest_invalid_param with field-level details
    - Exception (catch-all) -> never leaks internal details

Design Decisions:
    - Three-layer handler: domain (NavMenuError), validation (Pydantic), catch-all (Exception)
    - Kept out of main.py so the app module only wires routes and middleware
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from navmenu.core.errors import ErrorCategory, ErrorSeverity, NavMenuError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_navmenu_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_navmenu_error_handler(app: FastAPI) -> None:
    """Register menu-item domain/infrastructure error handler."""

    @app.exception_handler(NavMenuError)
    async def navmenu_error_handler(request: Request, exc: NavMenuError):
        """Handle all menu-item domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"NavMenuError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "item_id": exc.context.item_id,
                "menu_id": exc.context.menu_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
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
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                    "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
                },
            },
        )


def _field_name(loc: tuple) -> str:
    """Dotted field path without the body/query/path source prefix."""
    parts = loc[1:] if loc and loc[0] in ("body", "query", "path") else loc
    return ".".join(str(part) for part in parts)


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response.

    context.field names the first offending field, matching the envelope
    of FieldValidationError.
    """
    errors = exc.errors()
    return {
        "error": {
            "code": "rest_invalid_param",
            "message": "Invalid parameter(s).",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "status": status.HTTP_400_BAD_REQUEST,
            "context": {
                "field": _field_name(tuple(errors[0]["loc"])) if errors else None,
            },
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in errors
            ],
        },
    }
