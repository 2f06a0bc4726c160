"""
openapi_mock.data_store.base

Abstract data store shared by every backend.

Responsibilities:
- Implement get/save/delete on single resources and whole collections.
- Serialize operations so merges never interleave.
- Leave only "load a collection" / "save a collection" to the backends.
"""

from __future__ import annotations

import asyncio
import copy
from abc import ABC, abstractmethod
from datetime import UTC, datetime

from openapi_mock.data_store.resource import Resource, normalize_key
from openapi_mock.observability.logging import get_logger

log = get_logger(__name__)


class DataStoreError(Exception):
    pass


class DataStore(ABC):
    """
    Resources are grouped per collection key (`/pets`), and matched by their full
    key (`/pets/fido`). Keys follow the routing flags so `/Pets/Fido/` and
    `/pets/fido` are the same resource unless case-sensitive/strict routing is on.
    """

    def __init__(self, *, case_sensitive: bool = False, strict: bool = False) -> None:
        self.case_sensitive = case_sensitive
        self.strict = strict
        self._lock = asyncio.Lock()

    @abstractmethod
    async def _load_collection(self, collection_key: str) -> list[Resource]:
        """Return the stored resources of one collection, in insertion order."""

    @abstractmethod
    async def _save_collection(self, collection_key: str, resources: list[Resource]) -> None:
        """Replace the stored resources of one collection."""

    async def close(self) -> None:
        return None

    def _key(self, resource: Resource, *, collection_only: bool = False) -> str:
        return resource.key(
            case_sensitive=self.case_sensitive,
            strict=self.strict,
            collection_only=collection_only,
        )

    def _collection_key(self, collection: str) -> str:
        return normalize_key(collection, case_sensitive=self.case_sensitive, strict=self.strict)

    async def get(self, resource: Resource | str) -> Resource | None:
        resource = _as_resource(resource)
        async with self._lock:
            stored = await self._load_collection(self._key(resource, collection_only=True))
        key = self._key(resource)
        return next((r for r in stored if self._key(r) == key), None)

    async def save(self, resource: Resource) -> Resource:
        """
        Create the resource, or merge it into the existing one. Returns the stored resource.
        """

        collection_key = self._key(resource, collection_only=True)
        key = self._key(resource)
        async with self._lock:
            stored = await self._load_collection(collection_key)
            existing = next((r for r in stored if self._key(r) == key), None)
            if existing is None:
                existing = Resource.from_parts(
                    resource.collection, resource.name, copy.deepcopy(resource.data)
                )
                now = datetime.now(tz=UTC)
                existing.created_on = now
                existing.modified_on = now
                stored.append(existing)
                log.debug("resource_created", resource=str(existing))
            else:
                existing.merge(copy.deepcopy(resource.data))
                log.debug("resource_merged", resource=str(existing))
            await self._save_collection(collection_key, stored)
        return existing

    async def delete(self, resource: Resource | str) -> Resource | None:
        resource = _as_resource(resource)
        collection_key = self._key(resource, collection_only=True)
        key = self._key(resource)
        async with self._lock:
            stored = await self._load_collection(collection_key)
            removed = [r for r in stored if self._key(r) == key]
            if not removed:
                return None
            await self._save_collection(
                collection_key, [r for r in stored if self._key(r) != key]
            )
        log.debug("resource_deleted", resource=str(removed[-1]))
        return removed[-1]

    async def get_collection(self, collection: str) -> list[Resource]:
        async with self._lock:
            return await self._load_collection(self._collection_key(collection))

    async def delete_collection(self, collection: str) -> list[Resource]:
        collection_key = self._collection_key(collection)
        async with self._lock:
            removed = await self._load_collection(collection_key)
            if removed:
                await self._save_collection(collection_key, [])
        log.debug("collection_deleted", collection=collection, count=len(removed))
        return removed


def _as_resource(resource: Resource | str) -> Resource:
    return resource if isinstance(resource, Resource) else Resource(resource)


# --- Module Notes -----------------------------------------------------------
# Backends return copies from `_load_collection`; callers may mutate the resources
# they get back without touching stored state until `_save_collection`.
