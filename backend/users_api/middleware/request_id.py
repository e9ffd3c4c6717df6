"""
Users API - Request ID Middleware
==================================

What:  Assigns a correlation ID to each request and echoes it in the response.
How:   Reuses the client's X-Request-ID header when present, otherwise
       generates a short UUID. The ID is stored in a ContextVar so loggers and
       exception handlers can read it without access to the request object.
Who:   Applied to every request via Starlette middleware.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage for the current request ID.
# In async Python many requests share one thread, so threading.local won't do.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. Use the client's X-Request-ID header if it sent one
        2. Otherwise generate the first 8 characters of a UUID4
        3. Store it in request_id_var and request.state.request_id
        4. Add it to the response as X-Request-ID
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
