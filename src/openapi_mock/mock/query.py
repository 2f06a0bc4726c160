"""
openapi_mock.mock.query

Read operations (GET/HEAD) for resources and collections.

Responsibilities:
- Return a stored resource, or 404 when it does not exist.
- Return a collection, optionally filtered by declared query parameters.
"""

from __future__ import annotations

import json
from typing import Any

from openapi_mock.errors import NotFoundError
from openapi_mock.mock.context import MockContext
from openapi_mock.observability.logging import get_logger

log = get_logger(__name__)


async def query_resource(ctx: MockContext) -> None:
    resource = await ctx.data_store.get(ctx.path)
    if resource is None:
        log.debug("resource_not_found", path=ctx.path)
        raise NotFoundError()

    response = ctx.response
    response.last_modified = resource.modified_on
    if response.body_is_set:
        return
    if response.is_collection:
        response.body = [resource.data]
    else:
        response.body = resource.data


async def query_collection(ctx: MockContext) -> None:
    resources = [
        r for r in await ctx.data_store.get_collection(ctx.path) if _matches(r.data, ctx.query)
    ]

    response = ctx.response
    modified = [r.modified_on for r in resources if r.modified_on]
    if modified:
        response.last_modified = max(modified)
    if response.body_is_set:
        return
    if response.is_collection or not resources:
        response.body = [r.data for r in resources]
    else:
        response.body = resources[0].data


def _matches(data: Any, filters: dict[str, str]) -> bool:
    if not filters:
        return True
    if not isinstance(data, dict):
        return False
    return all(k in data and _as_text(data[k]) == v for k, v in filters.items())


def _as_text(value: Any) -> str:
    # Query strings carry text; compare `true`/`1` against JSON renderings.
    return value if isinstance(value, str) else json.dumps(value)
