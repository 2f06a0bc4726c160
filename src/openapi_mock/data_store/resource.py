"""
openapi_mock.data_store.resource

A single REST resource: its URL (collection + name), data and timestamps.

Responsibilities:
- Split URL paths into a collection and a resource name.
- Build data store keys honoring case-sensitive and strict routing.
- Merge data the way POST/PATCH expect (deep merge of objects and arrays).
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class Resource:
    """
    `Resource("/pets/fido")` has collection `/pets` and name `/fido`.

    A trailing slash belongs to the name (`/pets/fido/` → `/fido/`) so that strict
    routing can tell the two apart; the collection never ends with a slash.
    """

    def __init__(self, path: str = "/", data: Any = None) -> None:
        self.collection, self.name = _split(path)
        self.data = data
        self.created_on: datetime | None = None
        self.modified_on: datetime | None = None

    @classmethod
    def from_parts(cls, collection: str, name: str, data: Any = None) -> Resource:
        resource = cls(data=data)
        resource.collection = _normalize_collection(collection)
        resource.name = _normalize_name(name)
        return resource

    def __str__(self) -> str:
        return self.collection + self.name

    def __repr__(self) -> str:
        return f"Resource({str(self)!r})"

    def key(
        self,
        *,
        case_sensitive: bool = False,
        strict: bool = False,
        collection_only: bool = False,
    ) -> str:
        return normalize_key(
            self.collection if collection_only else str(self),
            case_sensitive=case_sensitive,
            strict=strict,
        )

    def merge(self, other: Resource | Any) -> None:
        """
        Merge `other` into this resource; objects and arrays are merged deeply,
        anything else replaces the current data.
        """

        self.modified_on = _utcnow()
        other_data = other.data if isinstance(other, Resource) else other
        if (isinstance(self.data, dict) and isinstance(other_data, dict)) or (
            isinstance(self.data, list) and isinstance(other_data, list)
        ):
            self.data = merge_data(self.data, other_data)
        else:
            self.data = other_data

    def to_dict(self) -> dict[str, Any]:
        return {
            "collection": self.collection,
            "name": self.name,
            "data": self.data,
            "created_on": self.created_on.isoformat() if self.created_on else None,
            "modified_on": self.modified_on.isoformat() if self.modified_on else None,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Resource:
        resource = cls.from_parts(raw.get("collection", ""), raw.get("name", "/"), raw.get("data"))
        resource.created_on = _parse_datetime(raw.get("created_on"))
        resource.modified_on = _parse_datetime(raw.get("modified_on"))
        return resource


def normalize_key(key: str, *, case_sensitive: bool = False, strict: bool = False) -> str:
    if not case_sensitive:
        key = key.lower()
    if not strict and len(key) > 1 and key.endswith("/"):
        key = key[:-1]
    return key


def merge_data(target: Any, source: Any) -> Any:
    """
    Deep merge: dicts by key, lists by index; scalars from `source` win.
    """

    if isinstance(target, dict) and isinstance(source, dict):
        for k, v in source.items():
            target[k] = merge_data(target[k], v) if k in target else v
        return target
    if isinstance(target, list) and isinstance(source, list):
        for i, v in enumerate(source):
            if i < len(target):
                target[i] = merge_data(target[i], v)
            else:
                target.append(v)
        return target
    return source


def _split(path: str) -> tuple[str, str]:
    # Ignore a trailing slash when looking for the last separator.
    last_slash = path[:-1].rfind("/")
    if last_slash == -1:
        return "", _normalize_name(path)
    return _normalize_collection(path[:last_slash]), _normalize_name(path[last_slash:])


def _normalize_collection(collection: str) -> str:
    collection = collection.rstrip("/")
    if collection and not collection.startswith("/"):
        collection = "/" + collection
    return collection


def _normalize_name(name: str) -> str:
    return name if name.startswith("/") else "/" + name


def _parse_datetime(value: Any) -> datetime | None:
    if value is None:
        return None
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
