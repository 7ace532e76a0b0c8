"""Application error taxonomy and its HTTP rendering.

Every expected per-request failure is an ``AppError`` subclass carrying a
stable ``kind`` and status code. Handlers and services raise them; the
exception handlers registered in ``register_error_handlers`` turn them into
the error envelope ``{"error": kind, "message": message}``. The framework's
own HTTP errors (unknown route, unsupported method) share that envelope.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for recoverable, caller-visible errors."""

    kind = "Error"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def headers(self) -> dict[str, str] | None:
        return None

    def to_dict(self) -> dict[str, str]:
        return {"error": self.kind, "message": self.message}


class ConflictError(AppError):
    kind = "Conflict"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class NotFoundError(AppError):
    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class UnauthenticatedError(AppError):
    kind = "Unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid authentication credentials"

    @property
    def headers(self) -> dict[str, str]:
        return {"WWW-Authenticate": "Bearer"}


class ForbiddenError(AppError):
    kind = "Forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You don't have permission to perform this action"


class InvalidInputError(AppError):
    kind = "InvalidInput"
    status_code = 422
    default_message = "Invalid request data"


def _format_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(loc) for loc in error.get("loc", ()) if loc != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or InvalidInputError.default_message


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} -> {exc.kind}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = InvalidInputError(_format_validation_error(exc))
    return await app_error_handler(request, error)


# Kinds for errors raised by the framework itself (unknown route, wrong method)
HTTP_ERROR_KINDS = {
    status.HTTP_401_UNAUTHORIZED: UnauthenticatedError.kind,
    status.HTTP_403_FORBIDDEN: ForbiddenError.kind,
    status.HTTP_404_NOT_FOUND: NotFoundError.kind,
    status.HTTP_405_METHOD_NOT_ALLOWED: "MethodNotAllowed",
    status.HTTP_409_CONFLICT: ConflictError.kind,
    422: InvalidInputError.kind,
}


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    kind = HTTP_ERROR_KINDS.get(exc.status_code, "Error")
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    logger.info(f"{request.method} {request.url.path} -> {kind}: {message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": kind, "message": message},
        headers=exc.headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the error envelope handlers to the application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
