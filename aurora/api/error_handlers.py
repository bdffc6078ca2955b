"""Error Handlers — map every failure of the planner API onto the error envelope.

Invariants:
    - AuroraError → its own status and to_response() body
    - RequestValidationError (bad body, query, or missing X-User-Id) → 400 VALIDATION_ERROR
    - ResponseValidationError → 502 AI_RESPONSE_INVALID, never a bare 500
    - Exception (catch-all) → 500 without internals
    - Every log line carries path and, when known, the caller's user_id

Design Decisions:
    - Response validation counts as an upstream failure: response models are
      filled from model output, so a payload that cannot be rendered is a bad
      gateway, the same code the AI assistant raises for unusable replies
    - Rate-limited AI errors expose Retry-After so clients can back off
    - Extracted from main.py (ADR: ExMA import fan-out < 10)
"""

import logging
import math

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from fastapi.responses import JSONResponse

from aurora.core.errors import AIResponseError, AuroraError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_aurora_error_handler(app)
    _register_request_validation_handler(app)
    _register_response_validation_handler(app)
    _register_generic_error_handler(app)


def _log_extra(request: Request, code: str, user_id: str | None = None) -> dict:
    """Fields picked up by observability.JSONFormatter."""
    return {
        "error_code": code,
        "path": request.url.path,
        "user_id": user_id or request.headers.get("x-user-id"),
    }


def _register_aurora_error_handler(app: FastAPI) -> None:
    """Register the handler for planner domain and infrastructure errors."""

    @app.exception_handler(AuroraError)
    async def aurora_error_handler(request: Request, exc: AuroraError):
        """Client mistakes log as warnings; upstream and database failures as errors."""
        extra = _log_extra(request, exc.code, exc.context.user_id)
        if exc.http_status < 500:
            logger.warning(f"{exc.code}: {exc.message}", extra=extra)
        else:
            logger.error(f"{exc.code}: {exc.message}", extra=extra)

        headers = None
        if exc.context.retry_after_ms:
            headers = {"Retry-After": str(math.ceil(exc.context.retry_after_ms / 1000))}
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(), headers=headers,
        )


def _register_request_validation_handler(app: FastAPI) -> None:
    """Register the handler for rejected request bodies, queries and headers."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError,
    ):
        """400 with one detail per offending field."""
        logger.warning(
            f"Invalid request on {request.url.path}: {len(exc.errors())} field error(s)",
            extra=_log_extra(request, "VALIDATION_ERROR"),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_response_validation_handler(app: FastAPI) -> None:
    """Register the handler for payloads that fail their response model."""

    @app.exception_handler(ResponseValidationError)
    async def response_validation_handler(
        request: Request, exc: ResponseValidationError,
    ):
        """502: the data behind the response could not be rendered."""
        error = AIResponseError("The assistant returned data that could not be rendered")
        logger.error(
            f"Response validation failed on {request.url.path}: {exc.errors()}",
            extra=_log_extra(request, error.code),
        )
        return JSONResponse(status_code=error.http_status, content=error.to_response())


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register the catch-all handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra=_log_extra(request, "INTERNAL_ERROR"),
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
    """Envelope with field paths such as "header.X-User-Id" or "body.end_date"."""
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
