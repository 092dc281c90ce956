# app/errors.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base for errors surfaced to the client as {"error": message}."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(AppError):
    status_code = 401
    default_message = "You must be logged in"


class InvalidCredentials(AppError):
    status_code = 401
    default_message = "Invalid email or password"


class QuotaExhausted(AppError):
    status_code = 403
    default_message = "You have already used your free generation attempt"


class Forbidden(AppError):
    status_code = 403
    default_message = "You are not authorized to access this content"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class DuplicateEmail(AppError):
    status_code = 409
    default_message = "Email already registered"


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class GenerationFailed(AppError):
    status_code = 500
    default_message = "Failed to generate content"


class ProviderUnavailable(AppError):
    status_code = 500
    default_message = "Content generation provider is not configured"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return ValidationError.default_message
    first = errors[0]
    # loc looks like ("body", "email"); drop the request-part prefix
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path", "cookie", "header")]
    msg = first.get("msg", ValidationError.default_message)
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error_response(400, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unexpected error: %s", type(exc).__name__)
        return _error_response(500, "Internal server error")
