"""
openapi_mock.mock.context

Per-request state passed through the mock handlers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from openapi_mock.data_store.base import DataStore

UNSET: Any = object()


@dataclass(slots=True)
class MockResponse:
    status_code: int = 200
    is_collection: bool = False
    body: Any = UNSET
    last_modified: datetime | None = None
    location: str | None = None

    @property
    def body_is_set(self) -> bool:
        return self.body is not UNSET


@dataclass(slots=True)
class MockContext:
    method: str
    path: str
    data_store: DataStore
    response: MockResponse
    body: Any = None
    files: dict[str, Any] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
