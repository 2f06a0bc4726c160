"""
openapi_mock.api.app

FastAPI app factory for the mock server.

Responsibilities:
- Load the OpenAPI document and build the FastAPI application.
- Register middleware (request context, OpenAPI metadata), routers and error handlers.
- Create and dispose the data store (memory or SQL).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from openapi_mock.api.routers.health import router as health_router
from openapi_mock.api.routers.mock import router as mock_router
from openapi_mock.data_store.base import DataStore
from openapi_mock.data_store.memory import MemoryDataStore
from openapi_mock.data_store.sql import SqlDataStore
from openapi_mock.db.init_db import init_db
from openapi_mock.db.session import create_engine, create_sessionmaker
from openapi_mock.errors import register_exception_handlers
from openapi_mock.observability.logging import configure_logging, get_logger
from openapi_mock.observability.middleware import RequestContextMiddleware
from openapi_mock.openapi.document import OpenApiDocument, load_document
from openapi_mock.openapi.metadata import OpenApiMetadataMiddleware
from openapi_mock.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, api: dict[str, Any] | None = None) -> FastAPI:
    if api is None:
        api = load_document(settings.openapi_document)
    document = OpenApiDocument(api)
    info = document.api.get("info") or {}

    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        api_title=info.get("title"),
        api_version=str(info["version"]) if info.get("version") is not None else None,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info(
            "startup",
            env=settings.env,
            api=info.get("title"),
            base_path=document.base_path,
            data_store=settings.data_store,
        )
        app.state.data_store = await _create_data_store(app, settings)
        try:
            yield
        finally:
            await app.state.data_store.close()
            # Dispose the engine to close pools/FDs gracefully.
            engine = getattr(app.state, "engine", None)
            if engine is not None:
                await engine.dispose()
            log.info("shutdown")

    # The mocked API owns every path, so FastAPI's own docs endpoints are disabled.
    app = FastAPI(
        title=str(info.get("title") or "OpenAPI Mock"),
        version=str(info.get("version") or "0.1.0"),
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    # Starlette runs the last-added middleware first: request context wraps metadata.
    app.add_middleware(
        OpenApiMetadataMiddleware,
        document=document,
        case_sensitive=settings.case_sensitive_routing,
        strict=settings.strict_routing,
    )
    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(mock_router)
    return app


async def _create_data_store(app: FastAPI, settings: Settings) -> DataStore:
    routing = {
        "case_sensitive": settings.case_sensitive_routing,
        "strict": settings.strict_routing,
    }
    if settings.data_store == "memory":
        return MemoryDataStore(**routing)

    engine = create_engine(settings)
    app.state.engine = engine
    if settings.env in ("dev", "test"):
        # Dev/test convenience: create tables automatically. Prod should use Alembic migrations.
        await init_db(engine)
    return SqlDataStore(create_sessionmaker(engine), **routing)


# --- Module Notes -----------------------------------------------------------
# App composition stays here; request handling lives in routers and `openapi_mock.mock`.
