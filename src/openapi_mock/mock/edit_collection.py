"""
openapi_mock.mock.edit_collection

Write operations addressed at a collection URL (`POST /pets`, `DELETE /pets`).

Responsibilities:
- Add a new resource to the collection, named after the body's `id` when present
  (percent-encoded, so the name stays a single path segment).
- Delete every resource of the collection.
"""

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable
from typing import Any
from urllib.parse import quote

from openapi_mock.data_store.resource import Resource
from openapi_mock.mock.context import MockContext
from openapi_mock.mock.edit_resource import create_resource
from openapi_mock.observability.logging import get_logger

log = get_logger(__name__)


async def add_to_collection(ctx: MockContext) -> None:
    data = create_resource(ctx).data
    name = _resource_name(data)
    resource = Resource.from_parts(ctx.path, f"/{name}", data)

    log.debug("adding_to_collection", collection=ctx.path, resource=str(resource))
    saved = await ctx.data_store.save(resource)

    response = ctx.response
    response.location = str(saved)
    response.last_modified = saved.modified_on
    if response.body_is_set:
        return
    if response.is_collection:
        collection = await ctx.data_store.get_collection(saved.collection)
        response.body = [r.data for r in collection]
    else:
        response.body = saved.data


async def delete_collection(ctx: MockContext) -> None:
    deleted = await ctx.data_store.delete_collection(ctx.path)
    log.debug("collection_deleted", collection=ctx.path, count=len(deleted))

    response = ctx.response
    if deleted:
        response.last_modified = max(r.modified_on for r in deleted if r.modified_on)
    if response.body_is_set:
        return
    if response.is_collection:
        response.body = [r.data for r in deleted]
    else:
        response.body = deleted[-1].data if deleted else None


def _resource_name(data: Any) -> str:
    if isinstance(data, dict) and data.get("id") not in (None, ""):
        return quote(str(data["id"]), safe="")
    return uuid.uuid4().hex


HANDLERS: dict[str, Callable[[MockContext], Awaitable[None]]] = {
    "POST": add_to_collection,
    "PATCH": add_to_collection,
    "PUT": add_to_collection,
    "DELETE": delete_collection,
}
