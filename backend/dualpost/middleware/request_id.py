"""
DualPost Backend — Request ID Middleware
=========================================

What:  Assigns a short ID to each incoming request and returns it in a header.
Why:   Lets every log line from one request, and the client's view of the
       response, be correlated. Error bodies stay fixed, so the ID travels in
       the X-Request-ID header rather than in the body.
How:   Uses the client's X-Request-ID if present, otherwise generates one;
       stores it in a ContextVar and on request.state.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. Use the client's X-Request-ID header when sent
        2. Otherwise generate an 8-character UUID prefix
        3. Store in ContextVar for loggers and exception handlers
        4. Add to response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers["X-Request-ID"] = rid

        return response
