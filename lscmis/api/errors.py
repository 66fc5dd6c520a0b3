# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exception handlers mapping failures to ``{"error": message}`` bodies.

Status classes:
- 400: workflow errors and malformed request bodies
- 404: NotFoundError
- 500: CodeGenerationError and anything unexpected ("Server error")

Tracebacks of unexpected errors are logged, never returned.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lscmis.domains.errors import CodeGenerationError, NotFoundError, WorkflowError

logger = logging.getLogger(__name__)

_WORKFLOW_STATUS: dict[type[WorkflowError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    CodeGenerationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def status_for(exc: WorkflowError) -> int:
    """HTTP status for a workflow error."""
    for error_type, status_code in _WORKFLOW_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def workflow_error_handler(request: Request, exc: WorkflowError) -> JSONResponse:
    status_code = status_for(exc)
    logger.info(
        "%s on %s %s: %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc.message,
    )
    return _error(status_code, exc.message)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if not errors:
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request")

    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    if location:
        message = f"{location}: {message}"
    return _error(status.HTTP_400_BAD_REQUEST, f"Invalid request: {message}")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install every handler on the application."""
    app.add_exception_handler(WorkflowError, workflow_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
