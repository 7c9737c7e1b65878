"""
DayNotes Backend — Request ID Middleware
==========================================

What:  Assigns a short correlation ID to each request and echoes it back.
How:   Reuses an incoming X-Request-ID header when it is a plain token,
       otherwise generates one. The ID goes into a ContextVar for loggers
       and exception handlers, and onto the response.

The error body is only `{"message": ...}`, so the X-Request-ID header is the
one place a client can read the ID to quote in a support request.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client IDs end up verbatim in log lines
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(header_value) -> str:
    """Return the client's ID if it is safe to log, else a fresh one."""
    if header_value and _VALID_REQUEST_ID.match(header_value):
        return header_value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get("X-Request-ID"))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
