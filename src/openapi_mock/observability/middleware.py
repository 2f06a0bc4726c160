"""
openapi_mock.observability.middleware

Outermost HTTP middleware: request ids and one access-log line per request.

Responsibilities:
- Generate/propagate the `x-request-id` header.
- Bind request metadata into structlog contextvars (the OpenAPI metadata middleware
  adds `openapi_path` / `operation_id` further in).
- Log `request_completed` with status and latency.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from openapi_mock.observability.logging import get_logger

log = get_logger(__name__)

REQUEST_ID_HEADER = "x-request-id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
            # Fields bound further in live in the route's task context; read the template back
            # from request.state (shared through the ASGI scope) instead.
            openapi = getattr(request.state, "openapi", None)
            log.info(
                "request_completed",
                status_code=response.status_code,
                openapi_path=openapi.path if openapi is not None else None,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
