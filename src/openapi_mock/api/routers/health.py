"""
openapi_mock.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) that touches the data store.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from openapi_mock.api.deps import data_store_dep
from openapi_mock.data_store.base import DataStore

router = APIRouter()


@router.get("/healthz", include_in_schema=False)
async def healthz() -> dict[str, str]:
    # Liveness: process is up and serving HTTP.
    return {"status": "ok"}


@router.get("/readyz", include_in_schema=False)
async def readyz(data_store: DataStore = Depends(data_store_dep)) -> dict[str, str]:
    # Readiness: verify the data store (and its DB, if any) answers.
    await data_store.get_collection("")
    return {"status": "ready"}
