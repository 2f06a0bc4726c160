"""
tests.conftest

Shared fixtures: a small Petstore document and app/client factories.
"""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx
import pytest
import pytest_asyncio

from openapi_mock.api.app import create_app
from openapi_mock.data_store.memory import MemoryDataStore
from openapi_mock.settings import Settings


def _json(schema_ref: str, description: str = "ok") -> dict[str, Any]:
    return {
        "description": description,
        "content": {"application/json": {"schema": {"$ref": schema_ref}}},
    }


PET = "#/components/schemas/Pet"
PETS = "#/components/schemas/Pets"

PETSTORE: dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "servers": [{"url": "http://localhost/api"}],
    "components": {
        "securitySchemes": {
            "basicAuth": {"type": "http", "scheme": "basic"},
            "apiKeyHeader": {"type": "apiKey", "in": "header", "name": "X-API-Key"},
            "apiKeyQuery": {"type": "apiKey", "in": "query", "name": "api_key"},
            "sessionCookie": {"type": "apiKey", "in": "cookie", "name": "session"},
            "oauth": {"type": "oauth2", "flows": {}},
        },
        "schemas": {
            "Pet": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "type": {"type": "string"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                },
            },
            "Pets": {"type": "array", "items": {"$ref": PET}},
        },
    },
    "paths": {
        "/pets": {
            "get": {
                "parameters": [{"name": "type", "in": "query", "schema": {"type": "string"}}],
                "responses": {"200": _json(PETS)},
            },
            "post": {"responses": {"201": _json(PET)}},
            "delete": {"responses": {"200": _json(PETS)}},
        },
        "/pets/{petName}": {
            "get": {"responses": {"200": _json(PET), "404": {"description": "missing"}}},
            "post": {"responses": {"200": _json(PET)}},
            "put": {"responses": {"200": _json(PET)}},
            "patch": {"responses": {"200": _json(PETS)}},
            "delete": {"responses": {"200": _json(PET)}},
        },
        "/pets/{petName}/photos/{photoId}": {
            "put": {"responses": {"204": {"description": "saved"}}},
        },
        "/secure/{name}": {
            "get": {
                "security": [{"basicAuth": []}, {"apiKeyHeader": [], "apiKeyQuery": []}],
                "responses": {"200": _json(PET)},
            },
            "put": {"security": [{"oauth": ["write"]}], "responses": {"200": _json(PET)}},
            "post": {"security": [{"sessionCookie": []}, {}], "responses": {"200": _json(PET)}},
            "delete": {"security": [{"undefined": []}], "responses": {"200": _json(PET)}},
            "patch": {"security": [{"sessionCookie": []}], "responses": {"200": _json(PET)}},
        },
    },
}


@pytest.fixture
def petstore() -> dict[str, Any]:
    return copy.deepcopy(PETSTORE)


@pytest.fixture
def store() -> MemoryDataStore:
    return MemoryDataStore()


@pytest_asyncio.fixture
async def client(petstore: dict[str, Any]) -> AsyncIterator[httpx.AsyncClient]:
    async with serve(Settings(env="test"), petstore) as c:
        yield c


@pytest_asyncio.fixture
async def sql_client(petstore: dict[str, Any], tmp_path) -> AsyncIterator[httpx.AsyncClient]:
    settings = Settings(
        env="test",
        data_store="sql",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'mock.db'}",
    )
    async with serve(settings, petstore) as c:
        yield c


@asynccontextmanager
async def serve(settings: Settings, api: dict[str, Any]) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=settings, api=api)
    # httpx's ASGITransport does not manage lifespan automatically; do it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c


@pytest.fixture
def make_client():
    # For tests that need non-default settings or documents.
    return serve
