"""
openapi_mock.api.routers.mock

Catch-all route serving every operation of the OpenAPI document.

Responsibilities:
- Reject paths/methods the document doesn't define (404/405).
- Enforce security requirements (presence of credentials only).
- Dispatch to the resource/collection handlers and render their response.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from fastapi import APIRouter, Depends, Request
from starlette.responses import Response

from openapi_mock.api.deps import data_store_dep
from openapi_mock.data_store.base import DataStore
from openapi_mock.errors import MethodNotAllowedError, NotFoundError
from openapi_mock.mock import edit_collection, edit_resource
from openapi_mock.mock.body import read_body
from openapi_mock.mock.context import MockContext, MockResponse
from openapi_mock.mock.query import query_collection, query_resource
from openapi_mock.mock.responder import render
from openapi_mock.mock.semantics import (
    is_collection_request,
    is_collection_response,
    success_response,
)
from openapi_mock.observability.logging import get_logger
from openapi_mock.openapi.document import OpenApiRequest
from openapi_mock.openapi.metadata import get_openapi, request_path
from openapi_mock.validation.security import validate_security

log = get_logger(__name__)

router = APIRouter()

MOCK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


@router.api_route(
    "/{full_path:path}",
    methods=MOCK_METHODS,
    include_in_schema=False,
    dependencies=[Depends(validate_security)],
)
async def mock_operation(
    request: Request,
    data_store: DataStore = Depends(data_store_dep),
) -> Response:
    openapi = get_openapi(request)
    if openapi is None:
        raise NotFoundError(f"Resource not found: {request.url.path}")
    if openapi.operation is None:
        raise MethodNotAllowedError(
            f"{request.method} is not allowed on {request.url.path}",
            headers={"Allow": ", ".join(openapi.allowed_methods)},
        )

    method = request.method
    body, files = (None, {}) if method in ("GET", "HEAD") else await read_body(request)
    status_code, _ = success_response(openapi.document, openapi.operation)
    collection_request = is_collection_request(openapi)
    ctx = MockContext(
        method=method,
        path=request_path(request),
        data_store=data_store,
        response=MockResponse(
            status_code=status_code,
            is_collection=is_collection_response(openapi),
        ),
        body=body,
        files=files,
        query=_declared_query(openapi, request),
    )

    log.debug(
        "mock_operation",
        template=openapi.path,
        collection_request=collection_request,
        collection_response=ctx.response.is_collection,
    )
    await _handler(method, collection_request)(ctx)
    return render(ctx.response, method)


def _handler(method: str, collection_request: bool) -> Callable[[MockContext], Awaitable[None]]:
    if method in ("GET", "HEAD"):
        return query_collection if collection_request else query_resource
    handlers = edit_collection.HANDLERS if collection_request else edit_resource.HANDLERS
    return handlers[method]


def _declared_query(openapi: OpenApiRequest, request: Request) -> dict[str, str]:
    # Only declared query parameters filter collections (not api keys or paging knobs).
    declared = [
        *(openapi.path_item.get("parameters") or []),
        *((openapi.operation or {}).get("parameters") or []),
    ]
    names = set()
    for param in declared:
        param = openapi.document.resolve(param)
        if param.get("in") == "query" and param.get("name"):
            names.add(param["name"])
    security_names = {
        scheme.get("name")
        for scheme in openapi.document.security_schemes.values()
        if scheme.get("type") == "apiKey"
    }
    return {
        name: value
        for name, value in request.query_params.items()
        if name in names and name not in security_names
    }


# --- Module Notes -----------------------------------------------------------
# Registered last in `create_app` so concrete routes (health probes) win.
