"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain, store and
framework exceptions to HTTP responses.
"""

import logging
from typing import Any

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from byki_admin.core.config import get_settings
from byki_admin.domain.exceptions import BykiException
from byki_admin.infrastructure.firebase._rest_client import FirestoreError

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "AUTHENTICATION_ERROR": 401,
    "AUTHORIZATION_ERROR": 403,
    "VALIDATION_ERROR": 400,
    "SERVICE_UNAVAILABLE": 503,
    "APP_STATE_CLOSED": 503,
}


def _byki_exception_handler(request: Request, exc: BykiException) -> JSONResponse:
    """Return JSON from BykiException.to_dict() with appropriate status code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    return JSONResponse(
        status_code=status,
        content=exc.to_dict(),
    )


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _store_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 502 when Firestore or another upstream Google API fails."""
    logger.error(
        "Upstream store error on %s (request %s): %s",
        request.url.path,
        _request_id(request),
        exc,
    )
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Upstream data store error"
    return JSONResponse(
        status_code=502,
        content={"error": "STORE_ERROR", "message": detail},
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception (request %s): %s", _request_id(request), exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: BykiException (and
    subclasses), FirestoreError and httpx.HTTPError, RequestValidationError,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(BykiException, _byki_exception_handler)
    app.add_exception_handler(FirestoreError, _store_exception_handler)
    app.add_exception_handler(httpx.HTTPError, _store_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
