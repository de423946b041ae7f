"""Error Handlers — global exception handlers for the kbchat API.

Invariants:
    - KbChatError → structured JSON with error code, message, severity
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (KbChatError), validation (Pydantic), catch-all (Exception)
    - Every envelope carries the request id so clients can quote it in bug reports
    - Validation-category domain errors logged at warning: they describe bad input,
      not a server fault
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from kbchat.api.request_context import REQUEST_ID_HEADER
from kbchat.core.errors import ErrorCategory, ErrorSeverity, KbChatError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_kbchat_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_kbchat_error_handler(app: FastAPI) -> None:

    @app.exception_handler(KbChatError)
    async def kbchat_error_handler(request: Request, exc: KbChatError):
        """Handle all kbchat domain errors."""
        if exc.context.request_id is None:
            exc.context.request_id = _request_id(request)
        level = (
            logging.WARNING if exc.category is ErrorCategory.VALIDATION
            else logging.ERROR
        )
        logger.log(
            level, f"KbChatError: {exc.message}",
            extra={
                "error_code": exc.code, "path": request.url.path,
                "request_id": exc.context.request_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        request_id = _request_id(request)
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"request_id": request_id, "error_code": "VALIDATION_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc, request_id),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details.

        Runs outside the request middleware, so the request id header is set here.
        """
        request_id = _request_id(request)
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"request_id": request_id, "error_code": "INTERNAL_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                    "request_id": request_id,
                },
            },
            headers={REQUEST_ID_HEADER: request_id} if request_id else None,
        )


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _build_validation_error_response(
    exc: RequestValidationError, request_id: str | None = None,
) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "request_id": request_id,
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
