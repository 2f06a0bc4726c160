"""
openapi_mock.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models and engine/session setup for the SQL data store.
"""

# Package marker.
