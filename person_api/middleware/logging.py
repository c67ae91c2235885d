"""
Person API - Request Logging Middleware
========================================

What:  One access-log line per HTTP request.
How:   Measures the time spent in the downstream app and logs method, path,
       status, duration, request id and client IP on `person_api.access`.
Who:   Applied to every request via Starlette middleware.
When:  Inside RequestIDMiddleware, so the request id is already set.

Log line:
    GET /api/persons/42 404 3.1ms [a1b2c3d4] from 127.0.0.1

Request bodies are never logged (they carry names and email addresses).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from person_api.middleware.request_id import request_id_var

logger = logging.getLogger("person_api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each HTTP request and response.

    Level by status class:
        5xx → ERROR, 4xx → WARNING, everything else → INFO.
    /health is not logged. An exception escaping the app is logged as 500
    and re-raised for the fallback handler.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        if request.url.path == "/health":
            return await call_next(request)

        try:
            response = await call_next(request)
        except Exception:
            # The fallback 500 is rendered further out, by ServerErrorMiddleware
            self._log_access(request, 500, start_time)
            raise

        self._log_access(request, response.status_code, start_time)
        return response

    @staticmethod
    def _log_access(request: Request, status: int, start_time: float) -> None:
        duration_ms = (time.perf_counter() - start_time) * 1000
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
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
