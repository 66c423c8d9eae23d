# backend/firedoor/middleware/structured_logging.py
from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

log = logging.getLogger("firedoor.request")


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Emits one structured log line per request with:
      request_id, method, path, status_code, latency_ms

    Expects RequestIdMiddleware to wrap it (request.state.request_id).
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        t0 = time.time()

        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            latency_ms = int((time.time() - t0) * 1000)
            request_id: Optional[str] = getattr(request.state, "request_id", None)

            log.info(
                "%s %s -> %s",
                request.method,
                request.url.path,
                status_code,
                extra={
                    "event": "http_request",
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "query": str(request.url.query) if request.url.query else "",
                    "status_code": status_code,
                    "latency_ms": latency_ms,
                },
            )
