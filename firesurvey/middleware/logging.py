"""
Fire Survey Backend: Access Log Middleware
==========================================

What:  One line on the `firesurvey.access` logger per request:

           POST /submitSurvey 409 4.2ms [1f0c2a9b] from 192.168.1.40

How:   Status picks the level (5xx ERROR, 4xx WARNING, else INFO). A handler
       that raises is logged as 500 before the error is re-raised to the
       exception handlers. /ping and /health are polled continuously and are
       not logged. Bodies (emails, addresses, prompts) are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from firesurvey.middleware.request_id import request_id_var

logger = logging.getLogger("firesurvey.access")

SKIPPED_PATHS = frozenset({"/ping", "/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request, 500, started)
            raise
        self._log(request, response.status_code, started)
        return response

    @staticmethod
    def _log(request: Request, status: int, started: float) -> None:
        elapsed_ms = (time.perf_counter() - started) * 1000
        client = request.client.host if request.client else "-"
        rid = request_id_var.get("")
        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            request.url.path,
            status,
            elapsed_ms,
            rid,
            client,
            extra={"request_id": rid, "status": status, "duration_ms": round(elapsed_ms, 2)},
        )
