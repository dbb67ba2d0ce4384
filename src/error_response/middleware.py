"""Middleware that gives diagnostic records a request identity."""

import uuid
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from structlog.contextvars import bound_contextvars

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Bind request identity to structlog context for the length of a request.

    - Reads X-Request-ID from request headers, or generates a UUID if missing
    - Binds request_id, method and path to structlog context, so an
      internal_server_error record can be traced back to the request
    - Adds X-Request-ID to response headers, including error responses

    Usage:
        app.add_middleware(RequestIDMiddleware)
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        # Unbound again on exit, even if call_next raises
        with bound_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        ):
            response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
