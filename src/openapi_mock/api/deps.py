"""
openapi_mock.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and the data store.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from fastapi import Request

from openapi_mock.data_store.base import DataStore
from openapi_mock.settings import Settings, get_settings


def settings_dep() -> Settings:
    return get_settings()


def data_store_dep(request: Request) -> DataStore:
    # The data store is created by the app lifespan in `openapi_mock.api.app.create_app`.
    return request.app.state.data_store  # type: ignore[attr-defined]
