"""Error Handlers - global exception handlers for the message board API.

Invariants:
    - MessageBoardError → structured JSON with error code, message, severity
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (MessageBoardError), validation (Pydantic), catch-all (Exception)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from messageboard.core.errors import MessageBoardError, ErrorSeverity, ErrorCategory

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_board_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_board_error_handler(app: FastAPI) -> None:

    @app.exception_handler(MessageBoardError)
    async def board_error_handler(request: Request, exc: MessageBoardError):
        """Handle all message board domain/infrastructure errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"MessageBoardError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "board": exc.context.board,
                "thread_id": exc.context.thread_id,
                "reply_id": exc.context.reply_id,
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
        """Catch-all - never leaks internal details."""
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
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
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
