"""
Notes Service: Request Logging Middleware
=========================================

What:  Correlates and logs every HTTP exchange.
How:   Picks the request id (the client's X-Request-ID when it looks like
       one, otherwise 8 fresh hex chars), publishes it through
       `request_id_var` for every logger and exception handler downstream,
       logs "Incoming request" at DEBUG and one summary line once the
       response is ready. The id is echoed back in the X-Request-ID header.

Summary line level follows the status code:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Request bodies are never logged.
"""

import logging
import re
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("notes_api.access")

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Anything else from the client is replaced, so log lines stay one token wide
_CLIENT_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def resolve_request_id(request: Request) -> str:
    """The client's X-Request-ID if usable, otherwise a fresh short id."""
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if _CLIENT_REQUEST_ID.match(supplied):
        return supplied
    return uuid.uuid4().hex[:8]


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Sets the request id, then logs method, path, status and duration."""

    # Health checks hit these every few seconds
    QUIET_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request)
        request_id_var.set(rid)

        method = request.method
        path = request.url.path
        quiet = path in self.QUIET_PATHS

        if not quiet:
            logger.debug(
                "Incoming request %s %s",
                method,
                path,
                extra={"request_id": rid, "method": method, "path": path},
            )

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        response.headers[REQUEST_ID_HEADER] = rid
        if quiet:
            return response

        status = response.status_code
        client_ip = request.client.host if request.client else "unknown"
        logger.log(
            _level_for(status),
            "%s %s %d %.1fms from %s",
            method,
            path,
            status,
            duration_ms,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
