"""Error Handlers — global exception handlers for the flowedit API.

Invariants:
    - FlowEditError → structured JSON with error code, message, severity
    - RequestValidationError / ValidationError → field-level error details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Four-layer handler: domain (FlowEditError), request validation, model validation
      (item updates are validated after the owning block is resolved), catch-all
    - Extracted from main.py so the app module only wires things together
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from flowedit.core.errors import FlowEditError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_flowedit_error_handler(app)
    _register_validation_error_handlers(app)
    _register_generic_error_handler(app)


_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.WARNING,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


def _register_flowedit_error_handler(app: FastAPI) -> None:
    """Register domain error handler."""

    @app.exception_handler(FlowEditError)
    async def flowedit_error_handler(request: Request, exc: FlowEditError):
        # client-side faults (stale indices, unknown ids) are not server errors
        logger.log(
            _LOG_LEVELS[exc.severity],
            f"{exc.code}: {exc.message}",
            extra={
                "error_code": exc.code, "path": request.url.path,
                "document_id": exc.context.document_id,
                "operation": exc.context.operation,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handlers(app: FastAPI) -> None:
    """Register request and model validation error handlers.

    Request bodies fail in FastAPI's RequestValidationError; item payloads fail
    later, in pydantic's ValidationError, once the owning block is known.
    """

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        return _validation_error_response(request, exc.errors())

    @app.exception_handler(ValidationError)
    async def item_validation_error_handler(
        request: Request, exc: ValidationError,
    ):
        return _validation_error_response(request, exc.errors())


def _validation_error_response(request: Request, errors) -> JSONResponse:
    logger.warning(
        f"Validation error on {request.url.path}: {errors}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_build_validation_error_response(errors),
    )


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
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(errors) -> dict:
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
                for e in errors
            ],
        },
    }
