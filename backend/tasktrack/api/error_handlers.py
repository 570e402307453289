"""Error Handlers — map every failure to one REST error envelope.

Invariants:
    - Body shape always comes from core.errors.error_envelope (status, reason, code, ...)
    - TaskTrackError → its own http_status; 5xx logged at ERROR, 4xx at WARNING
    - RequestValidationError → 400 "Validation failed" with one {field, message}
      entry per violated constraint
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Field names drop the request-part prefix (body/query/path): clients see
      "title", not "body.title"
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tasktrack.core.errors import (
    ErrorCategory, ErrorSeverity, TaskTrackError, error_envelope,
)

logger = logging.getLogger(__name__)

_REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(TaskTrackError, _handle_task_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)


async def _handle_task_error(request: Request, exc: TaskTrackError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{exc.code}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "task_id": exc.context.task_id,
            "tool_name": exc.context.tool_name,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    errors = [_field_error(e) for e in exc.errors()]
    logger.warning(
        f"Rejected request: {errors}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_envelope(
            status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "Validation failed",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, errors=errors,
        ),
    )


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True, extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR",
            "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def _field_error(error: dict) -> dict:
    loc = [str(part) for part in error.get("loc", ())]
    if loc and loc[0] in _REQUEST_PARTS:
        loc = loc[1:]
    return {"field": ".".join(loc) or "request", "message": error["msg"]}
