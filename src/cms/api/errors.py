"""Translate domain errors into the JSON error envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..exceptions import AssetIOError, NotFoundError, StorageError
from ..slides.slides_errors import (
    PayloadTooLargeError,
    SlideValidationError,
    UnsupportedMediaError,
)

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    """Return the uniform ``{"error": message}`` payload."""

    return JSONResponse(status_code=status_code, content={"error": message})


def not_found_error(message: str) -> HTTPException:
    """Return an exception rendered as a 404 envelope."""

    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)


def unauthorized_error(message: str = "Unauthorized request.") -> HTTPException:
    """Return an exception rendered as a 401 envelope."""

    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=message)


async def http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted(
        {".".join(str(part) for part in error.get("loc", ())[1:]) for error in exc.errors()}
    )
    return error_response(
        status.HTTP_404_NOT_FOUND, f"Invalid request fields: {', '.join(fields)}"
    )


async def validation_error_handler(_: Request, exc: SlideValidationError) -> JSONResponse:
    if isinstance(exc, UnsupportedMediaError):
        return error_response(status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, str(exc))
    if isinstance(exc, PayloadTooLargeError):
        return error_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, str(exc))
    return error_response(status.HTTP_404_NOT_FOUND, str(exc))


async def not_found_handler(_: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, str(exc))


async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "api.request.failed",
        extra={"path": request.url.path, "method": request.method},
        exc_info=exc,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error."
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach envelope handlers for HTTP and domain exceptions."""

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SlideValidationError, validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(AssetIOError, server_error_handler)
    app.add_exception_handler(StorageError, server_error_handler)
    app.add_exception_handler(Exception, server_error_handler)


__all__ = [
    "error_response",
    "not_found_error",
    "register_error_handlers",
    "unauthorized_error",
]
