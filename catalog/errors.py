"""
Failure values and their translation into HTTP responses.

The logic layer returns a ``Failure`` instead of raising; the routes raise it
as ``ApiError`` and the handlers installed here turn it into the error
envelope ``{"error": {"message": ..., "status": ...}}``.

Authentication and missing search queries keep a second, flat body shape
``{"message": ...}`` through ``PlainMessageError``.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

GENERIC_MESSAGE = "Something went wrong!"


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    INTERNAL = "internal"


STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.INTERNAL: 500,
}


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str

    @property
    def status(self) -> int:
        return STATUS_BY_KIND[self.kind]

    @classmethod
    def not_found(cls, message: str) -> "Failure":
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def validation(cls, message: str) -> "Failure":
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def internal(cls, message: str = GENERIC_MESSAGE) -> "Failure":
        return cls(ErrorKind.INTERNAL, message)


class ApiError(Exception):
    """Carries a Failure out of a dependency or route to the translator."""

    def __init__(self, failure: Failure):
        super().__init__(failure.message)
        self.failure = failure


class PlainMessageError(Exception):
    """Answered with a bare ``{"message": ...}`` body, outside the envelope."""

    status_code = 400
    message = "Bad Request"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code


class AuthenticationFailure(PlainMessageError):
    status_code = 401
    message = "Unauthorized: Invalid API Key"


class SearchQueryMissing(PlainMessageError):
    status_code = 400
    message = 'Search query parameter "q" is required.'


def error_envelope(failure: Failure, status: Optional[int] = None, headers=None) -> JSONResponse:
    status = status or failure.status
    return JSONResponse(
        status_code=status,
        content={"error": {"message": failure.message, "status": status}},
        headers=headers,
    )


def _kind_for_status(status_code: int) -> ErrorKind:
    for kind, status in STATUS_BY_KIND.items():
        if status == status_code:
            return kind
    return ErrorKind.VALIDATION if status_code < 500 else ErrorKind.INTERNAL


def install_error_handlers(app: FastAPI, logger: logging.Logger) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        failure = exc.failure
        logger.warning("%s %s -> %d %s", request.method, request.url.path, failure.status, failure.message)
        return error_envelope(failure)

    @app.exception_handler(PlainMessageError)
    async def plain_message_handler(request: Request, exc: PlainMessageError) -> JSONResponse:
        logger.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else GENERIC_MESSAGE
        failure = Failure(_kind_for_status(exc.status_code), message)
        logger.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, message)
        return error_envelope(failure, status=exc.status_code, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = "; ".join(
            f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in exc.errors()
        )
        failure = Failure.validation(message or "Invalid request.")
        logger.warning("%s %s -> %d %s", request.method, request.url.path, failure.status, failure.message)
        return error_envelope(failure)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_envelope(Failure.internal())
