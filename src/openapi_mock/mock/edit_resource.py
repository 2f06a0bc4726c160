"""
openapi_mock.mock.edit_resource

Create, update, overwrite and delete a single REST resource at the request URL.

Responsibilities:
- POST/PATCH merge new data into the existing resource (creating it if needed).
- PUT replaces the resource; DELETE removes it.
- Respond with the resource, or the whole collection when the operation returns an array.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from openapi_mock.data_store.resource import Resource
from openapi_mock.errors import NotFoundError
from openapi_mock.mock.context import MockContext
from openapi_mock.observability.logging import get_logger

log = get_logger(__name__)


async def merge_resource(ctx: MockContext) -> None:
    """
    If the resource already exists the new data is merged into it; use PUT to overwrite.
    """

    resource = create_resource(ctx)
    log.debug("saving_resource", resource=str(resource))
    saved = await ctx.data_store.save(resource)
    await send_response(ctx, saved)


async def overwrite_resource(ctx: MockContext) -> None:
    """
    If the resource already exists it is replaced; use POST or PATCH to merge.
    """

    resource = create_resource(ctx)
    await ctx.data_store.delete(resource)
    log.debug("saving_resource", resource=str(resource))
    saved = await ctx.data_store.save(resource)
    await send_response(ctx, saved)


async def delete_resource(ctx: MockContext) -> None:
    resource = create_resource(ctx)
    deleted = await ctx.data_store.delete(resource)
    await send_response(ctx, deleted)


def create_resource(ctx: MockContext) -> Resource:
    resource = Resource(ctx.path)
    if ctx.files:
        # Uploaded files are saved alongside the form fields.
        resource.data = {**(ctx.body if isinstance(ctx.body, dict) else {}), **ctx.files}
    else:
        resource.data = ctx.body
    return resource


async def send_response(ctx: MockContext, resource: Resource | None) -> None:
    if resource is None:
        log.debug("resource_not_found", path=ctx.path)
        raise NotFoundError()

    log.debug("resource_edited", resource=str(resource))
    response = ctx.response
    response.last_modified = resource.modified_on

    # Leave a body set by earlier processing alone.
    if response.body_is_set:
        return
    if response.is_collection:
        collection = await ctx.data_store.get_collection(resource.collection)
        response.body = [r.data for r in collection]
    else:
        response.body = resource.data


HANDLERS: dict[str, Callable[[MockContext], Awaitable[None]]] = {
    "POST": merge_resource,
    "PATCH": merge_resource,
    "PUT": overwrite_resource,
    "DELETE": delete_resource,
}
