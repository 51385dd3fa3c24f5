"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to the error envelope.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from medialib.core.config import get_settings
from medialib.domain.exceptions import MediaLibraryException
from medialib.schemas.envelope import error_body

logger = logging.getLogger(__name__)

# Status -> code for framework HTTP errors raised outside the domain layer
_HTTP_STATUS_CODE: dict[int, str] = {
    400: "invalid_request",
    401: "authentication_failed",
    404: "not_found",
    405: "method_not_allowed",
    503: "service_unavailable",
}


def _media_library_exception_handler(
    request: Request, exc: MediaLibraryException
) -> JSONResponse:
    """Return the error envelope using the exception's status, code and details."""
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.error_code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, exc.message, exc.status_code, exc.error_code, exc.details),
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 invalid_request with pydantic error details."""
    return JSONResponse(
        status_code=400,
        content=error_body(
            request,
            "Request validation failed",
            400,
            "invalid_request",
            {"errors": jsonable_encoder(exc.errors())},
        ),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return the error envelope for Starlette HTTP exceptions (status + detail)."""
    code = _HTTP_STATUS_CODE.get(exc.status_code, "http_error")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, str(exc.detail), exc.status_code, code),
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content=error_body(request, detail, 500, "server_error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: MediaLibraryException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(MediaLibraryException, _media_library_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
