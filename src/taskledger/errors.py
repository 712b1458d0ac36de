"""Error taxonomy and the handlers that render it.

Every failure leaves the API as ``{"error": "<message>"}``. Domain errors
carry their own status code and a client-safe message; anything else is
logged with its traceback and reported as a generic 500 by
``taskledger.middleware.errors``.
"""

from typing import Optional

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger()


class AppError(Exception):
    """Base for errors that map to a client-facing response."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class DuplicateUsername(AppError):
    status_code = 400
    message = "Username already taken"


class InvalidCredentials(AppError):
    """Unknown user and wrong password share this error on purpose."""

    status_code = 401
    message = "Invalid username or password"


class Unauthorized(AppError):
    """No session cookie, or one that is expired or unknown."""

    status_code = 401
    message = "User is not authenticated"


class NotFound(AppError):
    status_code = 404
    message = "Not found"


class InternalError(AppError):
    status_code = 500
    message = "Internal server error"


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": message}, headers=headers
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request.app_error", path=request.url.path, error=str(exc))
    return error_response(exc.status_code, exc.message)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(
        exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None)
    )


# Where FastAPI found the bad value; clients only care about the field name.
_LOC_SOURCES = ("body", "path", "query", "header", "cookie")


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Only report the first problem; never echo the submitted input back.
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p not in _LOC_SOURCES)
    reason = first.get("msg", "Invalid request")
    message = f"{field}: {reason}" if field else reason
    return error_response(422, message)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all error renderers to the app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
