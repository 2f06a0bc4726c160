"""
openapi_mock.openapi.metadata

Middleware that attaches OpenAPI metadata to each request.

Responsibilities:
- Match the request against the document and store the result on `request.state.openapi`.
- Bind the matched template and operation id into the log context.
- Offer accessors used by the security check and the mock route.
"""

from __future__ import annotations

from urllib.parse import quote

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from openapi_mock.observability.logging import get_logger
from openapi_mock.openapi.document import OpenApiDocument, OpenApiRequest

log = get_logger(__name__)


class OpenApiMetadataMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        *,
        document: OpenApiDocument,
        case_sensitive: bool = False,
        strict: bool = False,
    ) -> None:
        super().__init__(app)
        self._document = document
        self._case_sensitive = case_sensitive
        self._strict = strict

    async def dispatch(self, request: Request, call_next) -> Response:
        openapi = self._document.match(
            request.method,
            request_path(request),
            case_sensitive=self._case_sensitive,
            strict=self._strict,
        )
        if openapi is not None:
            structlog.contextvars.bind_contextvars(
                openapi_path=openapi.path,
                operation_id=(openapi.operation or {}).get("operationId"),
            )
            log.debug("openapi_path_matched", has_operation=openapi.operation is not None)
        request.state.openapi = openapi
        return await call_next(request)


def request_path(request: Request) -> str:
    """
    The request path as sent, still percent-encoded.

    Matching and data store keys use this form so an encoded `/` (`%2F`) stays inside
    one path segment.
    """

    raw = request.scope.get("raw_path")
    if raw:
        return raw.split(b"?", 1)[0].decode("latin-1")
    return quote(request.url.path)


def get_openapi(request: Request) -> OpenApiRequest | None:
    return getattr(request.state, "openapi", None)


def is_openapi_request(request: Request) -> bool:
    openapi = get_openapi(request)
    return openapi is not None and openapi.operation is not None


# --- Module Notes -----------------------------------------------------------
# `request.state` is backed by the ASGI scope, so values set here are visible to
# routes and dependencies further down the stack.
