"""
Fire Survey Backend: Request ID Middleware
==========================================

What:  Tags every request with a correlation ID and returns it as X-Request-ID.
How:   A client-supplied X-Request-ID is reused if it is short and printable
       (the alarm device and the survey page may send their own); anything
       else is replaced by 8 hex characters from uuid4. The ID lands in a
       ContextVar for log lines and error bodies, and in request.state for
       handlers that run outside this middleware.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(supplied: Optional[str]) -> str:
    """Return the client's ID when usable, otherwise a fresh short ID."""
    if supplied:
        candidate = supplied.strip()
        if 0 < len(candidate) <= MAX_REQUEST_ID_LENGTH and candidate.isprintable():
            return candidate
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
