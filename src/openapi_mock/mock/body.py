"""
openapi_mock.mock.body

Request body parsing for the mock route.

Responsibilities:
- Decode JSON, form and text bodies into plain Python data.
- Describe uploaded files so they can be stored alongside the form fields.
"""

from __future__ import annotations

import json
from typing import Any

from starlette.datastructures import UploadFile
from starlette.requests import Request

from openapi_mock.errors import BadRequestError


async def read_body(request: Request) -> tuple[Any, dict[str, Any]]:
    """
    Returns `(body, files)`; `files` is only populated for multipart uploads.
    """

    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type in ("multipart/form-data", "application/x-www-form-urlencoded"):
        fields: dict[str, Any] = {}
        files: dict[str, Any] = {}
        form = await request.form()
        try:
            for name, value in form.multi_items():
                if isinstance(value, UploadFile):
                    files[name] = await _describe_file(value)
                else:
                    _add_field(fields, name, value)
        finally:
            await form.close()
        return fields, files

    raw = await request.body()
    if not raw:
        return None, {}

    if content_type == "application/json" or content_type.endswith("+json"):
        try:
            return json.loads(raw), {}
        except ValueError as e:
            raise BadRequestError(f"Invalid JSON body: {e}") from e

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise BadRequestError(f"Unable to decode request body: {e}") from e
    if not content_type:
        # Clients often omit the header for JSON; fall back to text if it isn't JSON.
        try:
            return json.loads(text), {}
        except ValueError:
            return text, {}
    return text, {}


async def _describe_file(upload: UploadFile) -> dict[str, Any]:
    content = await upload.read()
    return {
        "filename": upload.filename,
        "content_type": upload.content_type,
        "size": len(content),
    }


def _add_field(fields: dict[str, Any], name: str, value: str) -> None:
    # Repeated fields (`tag=a&tag=b`) become lists.
    if name not in fields:
        fields[name] = value
    elif isinstance(fields[name], list):
        fields[name].append(value)
    else:
        fields[name] = [fields[name], value]
