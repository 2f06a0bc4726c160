"""
tests.test_smoke

Minimal smoke tests to validate the service can boot and serve core endpoints.

Responsibilities:
- Ensure the FastAPI app starts and the readiness endpoint reaches the data store.
"""

from __future__ import annotations

import httpx
import pytest


@pytest.mark.asyncio
async def test_health_endpoints(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

    r = await client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_health_endpoints_with_sql_store(sql_client: httpx.AsyncClient) -> None:
    r = await sql_client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz", headers={"x-request-id": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"

    r = await client.get("/healthz")
    assert r.headers["x-request-id"]


def test_main_accepts_document_path(monkeypatch: pytest.MonkeyPatch) -> None:
    from openapi_mock.api import __main__ as entrypoint

    created: dict[str, object] = {}

    def fake_create_app(*, settings):
        created["document"] = settings.openapi_document
        return "app"

    def fake_run(app, **kwargs) -> None:
        created["app"] = app
        created["port"] = kwargs["port"]

    monkeypatch.setattr(entrypoint, "create_app", fake_create_app)
    monkeypatch.setattr(entrypoint.uvicorn, "run", fake_run)

    entrypoint.main(["petstore.yaml"])
    assert created == {"document": "petstore.yaml", "app": "app", "port": 8080}
