"""Last-resort error middleware — turns unexpected exceptions into 500s.

Registered innermost, so the generic 500 still travels back out through
CORS and the security headers like any other response. An Exception
handler on the app would run in Starlette's ServerErrorMiddleware
instead, which sits outside every user middleware and re-raises.
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from taskledger.errors import InternalError, error_response

logger = structlog.get_logger()


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Log the traceback, answer ``{"error": "Internal server error"}``."""

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception("request.unhandled_error", path=request.url.path)
            return error_response(InternalError.status_code, InternalError.message)
