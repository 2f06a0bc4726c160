"""
openapi_mock.data_store.sql

Data store persisted through async SQLAlchemy.

Responsibilities:
- Map `Resource` objects to `ResourceRecord` rows.
- Replace a collection's rows atomically on each save.
"""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from openapi_mock.data_store.base import DataStore, DataStoreError
from openapi_mock.data_store.resource import Resource
from openapi_mock.db.models import ResourceRecord


class SqlDataStore(DataStore):
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        case_sensitive: bool = False,
        strict: bool = False,
    ) -> None:
        super().__init__(case_sensitive=case_sensitive, strict=strict)
        self._session_factory = session_factory

    async def _load_collection(self, collection_key: str) -> list[Resource]:
        stmt = (
            select(ResourceRecord)
            .where(ResourceRecord.collection_key == collection_key)
            .order_by(ResourceRecord.id)
        )
        try:
            async with self._session_factory() as session:
                rows = (await session.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            raise DataStoreError(f"Unable to read collection {collection_key!r}: {e}") from e
        return [_to_resource(row) for row in rows]

    async def _save_collection(self, collection_key: str, resources: list[Resource]) -> None:
        try:
            async with self._session_factory() as session, session.begin():
                await session.execute(
                    delete(ResourceRecord).where(ResourceRecord.collection_key == collection_key)
                )
                session.add_all(
                    ResourceRecord(
                        collection_key=collection_key,
                        collection=r.collection,
                        name=r.name,
                        data=r.data,
                        created_on=r.created_on,
                        modified_on=r.modified_on,
                    )
                    for r in resources
                )
        except SQLAlchemyError as e:
            raise DataStoreError(f"Unable to save collection {collection_key!r}: {e}") from e


def _to_resource(row: ResourceRecord) -> Resource:
    return Resource.from_dict(
        {
            "collection": row.collection,
            "name": row.name,
            "data": row.data,
            "created_on": row.created_on,
            "modified_on": row.modified_on,
        }
    )


# --- Module Notes -----------------------------------------------------------
# SQLite drops tzinfo on DateTime(timezone=True); `Resource.from_dict` re-attaches UTC.
