"""Error Handlers — JSON rendering for errors that never reach a pipeline boundary.

Invariants:
    - RestfulServiceError raised by a dependency or non-pipeline route keeps its own status
    - A body or query parameter FastAPI cannot parse is a 400, with one detail per field
    - Anything else is a 500 whose body names no exception type or message

Design Decisions:
    - Pipeline endpoints answer in plain text and never get here; these handlers give the
      remaining surface (request parsing, health, OpenAPI) the JSON envelope of to_response()
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from restful_service.core.errors import ErrorCategory, ErrorSeverity, RestfulServiceError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RestfulServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


async def service_error_handler(request: Request, exc: RestfulServiceError) -> JSONResponse:
    logger.warning(
        f"{exc.code} outside the pipeline on {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code, "status_code": exc.http_status,
            "path": request.url.path,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def request_validation_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Unparseable input is the client's fault: 400, not FastAPI's default 422."""
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(
        f"Rejected request to {request.url.path}: {len(details)} invalid field(s)",
        extra={"path": request.url.path, "status_code": status.HTTP_400_BAD_REQUEST},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details=details,
        ),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity, **extra,
) -> dict:
    return {
        "error": {
            "code": code, "message": message,
            "category": category.value, "severity": severity.value, **extra,
        },
    }
