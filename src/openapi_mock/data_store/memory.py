"""
openapi_mock.data_store.memory

In-process data store (the default for the mock server and tests).
"""

from __future__ import annotations

import copy

from openapi_mock.data_store.base import DataStore
from openapi_mock.data_store.resource import Resource


class MemoryDataStore(DataStore):
    def __init__(self, *, case_sensitive: bool = False, strict: bool = False) -> None:
        super().__init__(case_sensitive=case_sensitive, strict=strict)
        self._collections: dict[str, list[Resource]] = {}

    async def _load_collection(self, collection_key: str) -> list[Resource]:
        return copy.deepcopy(self._collections.get(collection_key, []))

    async def _save_collection(self, collection_key: str, resources: list[Resource]) -> None:
        if resources:
            self._collections[collection_key] = copy.deepcopy(resources)
        else:
            self._collections.pop(collection_key, None)
