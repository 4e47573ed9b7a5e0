"""Error Handlers — global exception handlers for the task API.

Invariants:
    - Every error body has the same envelope: TaskShareError.to_response()
    - RequestValidationError -> 400 VALIDATION_ERROR, field names without the
      body/query/header prefix ("title", not "body.title")
    - Exception (catch-all) -> 500 INTERNAL_ERROR, never leaks internal details
    - Not-found responses carry no hint whether the task exists

Design Decisions:
    - Three-layer handler: domain (TaskShareError), validation (Pydantic), catch-all (Exception)
    - Pydantic and unexpected errors are converted INTO TaskShareError instances, so
      clients parse one shape and context.task_id is filled from the path when present
    - 4xx domain errors logged at WARNING, 5xx at ERROR
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from taskshare.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, TaskShareError, TaskValidationError,
)

logger = logging.getLogger(__name__)

_LOCATIONS = {"body", "query", "header", "path"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(TaskShareError, _handle_domain_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)


def _render(request: Request, exc: TaskShareError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "error_code": exc.code, "path": request.url.path,
            "task_id": exc.context.task_id,
        },
    )
    headers = {"WWW-Authenticate": "Bearer"} if exc.http_status == 401 else None
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(), headers=headers,
    )


async def _handle_domain_error(request: Request, exc: TaskShareError):
    return _render(request, exc)


def field_name(loc: tuple) -> str:
    """('body', 'tags', 0) -> 'tags.0'; a bare ('body',) stays 'body'."""
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in _LOCATIONS:
        parts = parts[1:]
    return ".".join(parts)


async def _handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {"field": field_name(e["loc"]), "message": e["msg"], "type": e["type"]}
        for e in exc.errors()
    ]
    error = TaskValidationError(
        "Invalid request data", details[0]["field"] if details else "body",
        context=ErrorContext(task_id=request.path_params.get("task_id")),
    )
    error.context.details = details
    return _render(request, error)


async def _handle_unexpected_error(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    error = TaskShareError(
        "An unexpected error occurred", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
        ErrorSeverity.CRITICAL,
        ErrorContext(task_id=request.path_params.get("task_id")),
        http_status=500,
    )
    return _render(request, error)
