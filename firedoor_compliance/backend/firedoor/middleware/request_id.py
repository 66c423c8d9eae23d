# backend/firedoor/middleware/request_id.py
from __future__ import annotations

import uuid
from contextvars import ContextVar
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    return request_id_ctx.get()


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Sets a per-request id and returns it in response headers.

    - Accepts incoming X-Request-ID (preferred) or X-Request-Id (common variant)
    - Otherwise generates UUID4
    - Stores it in a ContextVar read by JsonFormatter, so every firedoor log
      line (inspection.evaluated, door.confidence, defect.*, http_request)
      carries request_id next to its door_id / inspection_id / defect_id extras
    - Also sets request.state.request_id for StructuredLoggingMiddleware
    """

    header_out = "X-Request-ID"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = request.headers.get("X-Request-ID") or request.headers.get("X-Request-Id")
        if not rid:
            rid = str(uuid.uuid4())

        request.state.request_id = rid
        token = request_id_ctx.set(rid)
        try:
            resp = await call_next(request)
            resp.headers[self.header_out] = rid
            return resp
        finally:
            request_id_ctx.reset(token)
