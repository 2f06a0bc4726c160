"""
openapi_mock.db.models

Persistence schema for mocked resources.

Responsibilities:
- Store one row per resource, grouped by its normalized collection key.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from openapi_mock.db.base import Base


class ResourceRecord(Base):
    __tablename__ = "resources"

    # Autoincrement id doubles as insertion order within a collection.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    collection_key: Mapped[str] = mapped_column(String(2048), nullable=False, index=True)

    # Original (non-normalized) URL parts.
    collection: Mapped[str] = mapped_column(String(2048), nullable=False)
    name: Mapped[str] = mapped_column(String(2048), nullable=False)

    data: Mapped[Any] = mapped_column(JSON, nullable=True)

    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    modified_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
