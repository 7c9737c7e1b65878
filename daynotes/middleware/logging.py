"""
DayNotes Backend — Access Log Middleware
==========================================

What:  One access-log line per API call on the `daynotes.access` logger.
Who:   Every request except GET /health.

Line format:
    POST /api/notes/{note_id} 403 4.2ms [a1b2c3d4] from 10.0.0.7

The path is the matched route template, so note ids, user ids and dates in
the URL never reach the log. Request bodies (passwords, note text, wages)
are never read here.

Levels:
    5xx        → ERROR
    401 /login → INFO (a mistyped password is routine)
    other 4xx  → WARNING
    otherwise  → INFO
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from daynotes.middleware.request_id import request_id_var

logger = logging.getLogger("daynotes.access")

QUIET_PATHS = frozenset({"/health"})


def route_template(request: Request) -> str:
    """`/api/notes/{note_id}` for a matched route, the raw path otherwise."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def access_level(path: str, status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status == 401 and path == "/login":
        return logging.INFO
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        path = route_template(request)
        status = response.status_code
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        logger.log(
            access_level(path, status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "route": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
