"""
openapi_mock.db.session

Async SQLAlchemy engine + session factory for the SQL data store.

Responsibilities:
- Create the async engine from settings (SQLite in-memory databases get a single
  shared connection so the tables created at startup stay visible).
- Create the async sessionmaker used by `SqlDataStore`.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from openapi_mock.settings import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    url = make_url(settings.database_url)
    options: dict[str, Any] = {"echo": settings.database_echo}
    if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
        # Every new connection would otherwise see its own empty database.
        options["poolclass"] = StaticPool
    else:
        options["pool_pre_ping"] = True
    return create_async_engine(url, **options)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Rows are converted to Resource objects right away; nothing lazy-loads after commit.
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)
