from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class GradeApiError(Exception):
    """Base class for errors that map onto a failure envelope."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, error: str | None = None):
        super().__init__(message)
        self.message = message
        self.error = error


class ValidationError(GradeApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(GradeApiError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreFailure(GradeApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(message: str, error: object | None = None, **extra) -> dict:
    body = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    body.update(extra)
    return body


def add_error_handlers(app: FastAPI, expose_details: bool = True) -> None:
    @app.exception_handler(GradeApiError)
    async def grade_api_error_handler(request: Request, exc: GradeApiError):
        error = exc.error
        if isinstance(exc, StoreFailure) and not expose_details:
            error = None
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, error))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Invalid request", jsonable_encoder(exc.errors())),
        )

    @app.exception_handler(StarletteHTTPException)
    async def route_not_found_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content=error_body(
                    "Route not found",
                    path=request.url.path,
                    method=request.method,
                ),
            )
        return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error", str(exc) if expose_details else None),
        )
