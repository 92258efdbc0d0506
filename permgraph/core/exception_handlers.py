"""Centralized exception handlers for the FastAPI app.

Every error body has the shape {"error", "message", "details", "request_id"}.
Domain errors map to a status through their error_code; GraphInvariantError
and anything else unexpected fall through to the generic 500 handler.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from permgraph.core.config import get_settings
from permgraph.domain.exceptions import PermGraphException
from permgraph.shared.context import get_request_id

logger = logging.getLogger(__name__)

_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "VALIDATION_ERROR": 400,
    "PERMISSION_ALREADY_EXISTS": 409,
    "PERMISSION_IN_USE": 409,
    "SYSTEM_PERMISSION": 403,
    "DEPENDENCY_REJECTED": 409,
    "DUPLICATE_EDGE": 409,
    "DEPENDENCY_ENDPOINT_MISSING": 409,
    "TRAVERSAL_LIMIT_EXCEEDED": 422,
    "CONCURRENCY_CONFLICT": 409,
    "SERVICE_UNAVAILABLE": 503,
}

# Logged at WARNING: they point at load or data problems rather than bad input.
_OPERATIONAL_ERROR_CODES = frozenset(
    {"TRAVERSAL_LIMIT_EXCEEDED", "CONCURRENCY_CONFLICT", "SERVICE_UNAVAILABLE"}
)


def _error_response(status_code: int, body: dict[str, Any]) -> JSONResponse:
    body.setdefault("details", {})
    body["request_id"] = get_request_id()
    return JSONResponse(status_code=status_code, content=body)


def _permgraph_exception_handler(request: Request, exc: PermGraphException) -> JSONResponse:
    """Return PermGraphException.to_dict() with the status mapped from error_code (default 400)."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if exc.error_code in _OPERATIONAL_ERROR_CODES:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.error_code, exc.message)
    return _error_response(status, exc.to_dict())


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(
        422,
        {
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, {"error": "HTTP_ERROR", "message": exc.detail})


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include the exception text only when debug is True."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    message: Any = str(exc) if get_settings().debug else "Internal server error"
    return _error_response(500, {"error": "INTERNAL_ERROR", "message": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Register all handlers on the app. Call once, right after creating it."""
    app.add_exception_handler(PermGraphException, _permgraph_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
