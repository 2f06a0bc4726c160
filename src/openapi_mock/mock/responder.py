"""
openapi_mock.mock.responder

Turns a `MockResponse` into a Starlette response.
"""

from __future__ import annotations

from datetime import UTC
from email.utils import format_datetime

from fastapi.responses import JSONResponse
from starlette.responses import Response
from starlette.status import HTTP_204_NO_CONTENT

from openapi_mock.mock.context import MockResponse


def render(response: MockResponse, method: str) -> Response:
    headers: dict[str, str] = {}
    if response.last_modified is not None:
        last_modified = response.last_modified.astimezone(UTC)
        headers["Last-Modified"] = format_datetime(last_modified, usegmt=True)
    if response.location:
        headers["Location"] = response.location

    body = response.body if response.body_is_set else None
    if body is None or response.status_code == HTTP_204_NO_CONTENT or method == "HEAD":
        return Response(status_code=response.status_code, headers=headers)
    return JSONResponse(content=body, status_code=response.status_code, headers=headers)
