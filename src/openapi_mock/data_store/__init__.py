"""
openapi_mock.data_store

Pluggable storage for mocked REST resources.

Responsibilities:
- Define the `Resource` model and the `DataStore` interface.
- Provide in-memory and SQL-backed implementations.
"""

from openapi_mock.data_store.base import DataStore, DataStoreError
from openapi_mock.data_store.memory import MemoryDataStore
from openapi_mock.data_store.resource import Resource

__all__ = ["DataStore", "DataStoreError", "MemoryDataStore", "Resource"]
