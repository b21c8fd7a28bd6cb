"""Exception handlers that give every error the ``{error, details}`` shape.

Usage:
    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config import get_settings
from src.exceptions import APIError, ConflictError, ValidationFailedError

logger = logging.getLogger(__name__)

STATUS_TITLES = {
    status.HTTP_400_BAD_REQUEST: "Bad Request",
    status.HTTP_401_UNAUTHORIZED: "Unauthorized",
    status.HTTP_403_FORBIDDEN: "Forbidden",
    status.HTTP_404_NOT_FOUND: "Endpoint not found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method Not Allowed",
}


def _error_response(
    status_code: int, error: str, details: Any, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "details": details},
        headers=headers,
    )


def _field_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Flatten pydantic errors into ``[{field, message, value}]``."""
    details = []
    for err in exc.errors():
        # loc is ("body", "message") or ("query", "page"); drop the source
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        value = err.get("input")
        if isinstance(value, dict | list) or "password" in loc:
            value = None
        details.append(
            {
                "field": ".".join(loc) or None,
                "message": err.get("msg"),
                "value": value,
            }
        )
    return details


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return _error_response(exc.status_code, exc.error, exc.details, exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationFailedError(_field_errors(exc))
    return _error_response(error.status_code, error.error, error.details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        details = f"The requested endpoint {request.method} {request.url.path} does not exist"
    else:
        details = exc.detail
    title = STATUS_TITLES.get(exc.status_code, "Error")
    return _error_response(exc.status_code, title, details, getattr(exc, "headers", None))


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    error = ConflictError("Resource already exists")
    return _error_response(error.status_code, error.error, error.details)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    details = str(exc) or "An unexpected error occurred"
    if get_settings().is_production:
        details = "An internal server error occurred"
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", details
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all handlers on the application."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
