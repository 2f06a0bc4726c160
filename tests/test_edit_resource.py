"""
tests.test_edit_resource

Unit tests for the resource/collection edit handlers against an in-memory store.
"""

from __future__ import annotations

from typing import Any

import pytest

from openapi_mock.data_store.memory import MemoryDataStore
from openapi_mock.data_store.resource import Resource
from openapi_mock.errors import NotFoundError
from openapi_mock.mock import edit_collection, edit_resource
from openapi_mock.mock.context import MockContext, MockResponse


def _ctx(
    store: MemoryDataStore,
    method: str,
    path: str,
    body: Any = None,
    *,
    is_collection: bool = False,
    files: dict[str, Any] | None = None,
) -> MockContext:
    return MockContext(
        method=method,
        path=path,
        data_store=store,
        response=MockResponse(is_collection=is_collection),
        body=body,
        files=files or {},
    )


def test_verbs_map_to_handlers() -> None:
    assert edit_resource.HANDLERS["POST"] is edit_resource.merge_resource
    assert edit_resource.HANDLERS["PATCH"] is edit_resource.merge_resource
    assert edit_resource.HANDLERS["PUT"] is edit_resource.overwrite_resource
    assert edit_resource.HANDLERS["DELETE"] is edit_resource.delete_resource


@pytest.mark.asyncio
async def test_post_and_patch_merge(store: MemoryDataStore) -> None:
    ctx = _ctx(store, "POST", "/pets/fido", {"name": "Fido", "owner": {"name": "Bob"}})
    await edit_resource.merge_resource(ctx)
    assert ctx.response.body == {"name": "Fido", "owner": {"name": "Bob"}}
    assert ctx.response.last_modified is not None

    ctx = _ctx(store, "PATCH", "/pets/fido", {"owner": {"age": 4}})
    await edit_resource.merge_resource(ctx)
    assert ctx.response.body == {"name": "Fido", "owner": {"name": "Bob", "age": 4}}


@pytest.mark.asyncio
async def test_put_overwrites(store: MemoryDataStore) -> None:
    await store.save(Resource("/pets/fido", {"name": "Fido", "type": "dog"}))

    ctx = _ctx(store, "PUT", "/pets/fido", {"name": "Fido II"})
    await edit_resource.overwrite_resource(ctx)
    assert ctx.response.body == {"name": "Fido II"}
    assert (await store.get("/pets/fido")).data == {"name": "Fido II"}


@pytest.mark.asyncio
async def test_delete_returns_deleted_data(store: MemoryDataStore) -> None:
    await store.save(Resource("/pets/fido", {"name": "Fido"}))

    ctx = _ctx(store, "DELETE", "/pets/fido")
    await edit_resource.delete_resource(ctx)
    assert ctx.response.body == {"name": "Fido"}
    assert await store.get("/pets/fido") is None


@pytest.mark.asyncio
async def test_delete_missing_resource_is_404(store: MemoryDataStore) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        await edit_resource.delete_resource(_ctx(store, "DELETE", "/pets/nobody"))
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Not Found"


@pytest.mark.asyncio
async def test_collection_response_returns_all_data(store: MemoryDataStore) -> None:
    await store.save(Resource("/pets/rex", {"name": "Rex"}))

    ctx = _ctx(store, "PATCH", "/pets/fido", {"name": "Fido"}, is_collection=True)
    await edit_resource.merge_resource(ctx)
    assert ctx.response.body == [{"name": "Rex"}, {"name": "Fido"}]


@pytest.mark.asyncio
async def test_body_set_earlier_is_kept(store: MemoryDataStore) -> None:
    ctx = _ctx(store, "POST", "/pets/fido", {"name": "Fido"})
    ctx.response.body = {"preset": True}
    await edit_resource.merge_resource(ctx)
    assert ctx.response.body == {"preset": True}
    # The store is still updated and lastModified still recorded.
    assert (await store.get("/pets/fido")).data == {"name": "Fido"}
    assert ctx.response.last_modified is not None


@pytest.mark.asyncio
async def test_uploaded_files_are_saved_with_fields(store: MemoryDataStore) -> None:
    photo = {"filename": "fido.jpg", "content_type": "image/jpeg", "size": 3}
    ctx = _ctx(store, "POST", "/pets/fido", {"name": "Fido"}, files={"photo": photo})
    await edit_resource.merge_resource(ctx)
    assert ctx.response.body == {"name": "Fido", "photo": photo}


@pytest.mark.asyncio
async def test_add_to_collection_uses_id_or_generates_name(store: MemoryDataStore) -> None:
    ctx = _ctx(store, "POST", "/pets", {"id": 7, "name": "Fido"})
    await edit_collection.add_to_collection(ctx)
    assert ctx.response.location == "/pets/7"
    assert ctx.response.body == {"id": 7, "name": "Fido"}

    ctx = _ctx(store, "POST", "/pets", {"name": "Rex"}, is_collection=True)
    await edit_collection.add_to_collection(ctx)
    assert ctx.response.location.startswith("/pets/")
    assert ctx.response.location != "/pets/7"
    assert ctx.response.body == [{"id": 7, "name": "Fido"}, {"name": "Rex"}]


@pytest.mark.asyncio
async def test_delete_collection(store: MemoryDataStore) -> None:
    await store.save(Resource("/pets/fido", "fido"))
    await store.save(Resource("/pets/rex", "rex"))

    ctx = _ctx(store, "DELETE", "/pets", is_collection=True)
    await edit_collection.delete_collection(ctx)
    assert ctx.response.body == ["fido", "rex"]
    assert await store.get_collection("/pets") == []

    ctx = _ctx(store, "DELETE", "/pets")
    await edit_collection.delete_collection(ctx)
    assert ctx.response.body is None


@pytest.mark.asyncio
async def test_add_to_collection_encodes_id_into_one_segment(store: MemoryDataStore) -> None:
    ctx = _ctx(store, "POST", "/pets", {"id": "a/b c", "name": "Fido"})
    await edit_collection.add_to_collection(ctx)
    assert ctx.response.location == "/pets/a%2Fb%20c"

    # The Location path splits back into the same collection and name.
    location = Resource(ctx.response.location)
    assert location.collection == "/pets"
    assert (await store.get(location)).data == {"id": "a/b c", "name": "Fido"}
