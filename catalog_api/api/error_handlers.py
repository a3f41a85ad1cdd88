"""Error Handlers — envelopes for failures that never reach a route's status table.

Invariants:
    - Every failure body has the same {"error": {...}} envelope as CatalogError.to_response()
    - RequestValidationError -> 400 VALIDATION_ERROR, one detail per offending field
    - Unknown path / wrong method keep their status (404 / 405) but use the envelope
    - A CatalogError raised past a route answers with its default http_status
    - Anything else -> 500 INTERNAL_ERROR, message never includes the exception text

Design Decisions:
    - Validation shares the ValidationError type with the service layer: callers
      cannot tell boundary rejection from service rejection by shape
    - 400 instead of FastAPI's 422: every documented route answers bad input with 400
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_api.core.errors import (
    CatalogError, ErrorCategory, ErrorContext, ErrorSeverity, ValidationError,
)

logger = logging.getLogger(__name__)

_HTTP_CODES = {
    status.HTTP_404_NOT_FOUND: "ROUTE_NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def register_error_handlers(app: FastAPI) -> None:
    """Attach every global handler to the app."""
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity,
    **extra,
) -> dict:
    body = {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
        "timestamp": ErrorContext().timestamp.isoformat(),
    }
    body.update(extra)
    return {"error": body}


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    logger.error(
        f"{request.method} {request.url.path} raised {exc.code}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def validation_error_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Turn Pydantic's error list into a ValidationError envelope."""
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    first = details[0]["field"] if details else "request"
    error = ValidationError(
        "Invalid request data", first,
        ErrorContext(operation=f"{request.method} {request.url.path}"),
    )
    logger.warning(
        f"Validation failed on {request.url.path}: {[d['field'] for d in details]}",
        extra={"error_code": error.code, "path": request.url.path},
    )
    content = error.to_response()
    content["error"]["details"] = details
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    code = _HTTP_CODES.get(exc.status_code, "HTTP_ERROR")
    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(
            code, str(exc.detail), ErrorCategory.VALIDATION, ErrorSeverity.INFO,
        ),
        headers=getattr(exc, "headers", None),
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
