"""Domain errors and their HTTP mapping.

Every failure a handler can produce is a ``ReaderError`` subclass carrying the
status code it maps to. ``setup_exception_handlers`` turns them (and request
validation failures) into ``{"error": "<message>"}`` JSON bodies.
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from reader.core.logging_config import get_logger

logger = get_logger(__name__)


class ReaderError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class NotFound(ReaderError):
    status_code = 404
    message = "Not found"


class InvalidInput(ReaderError):
    status_code = 400
    message = "Invalid input"


class DuplicateCredential(ReaderError):
    status_code = 400
    message = "Username or email already exists"


class AuthError(ReaderError):
    status_code = 401
    message = "Not authenticated"


class InvalidCredentials(AuthError):
    message = "Invalid username or password"


class InvalidToken(AuthError):
    message = "Invalid or expired token"


class MissingToken(AuthError):
    message = "Missing bearer token"


class MalformedContent(ReaderError):
    message = "Stored content is malformed"


class PersistenceError(ReaderError):
    message = "Database error"


async def reader_error_handler(request: Request, exc: ReaderError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    if exc.status_code >= 500:
        logger.error("%s in %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Presence/type checks only; report the first offending field.
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query"))
        message = f"{field}: {first.get('msg', 'invalid')}" if field else first.get("msg", message)
    return JSONResponse(status_code=400, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception in %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ReaderError, reader_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
