"""
openapi_mock.mock

Mock implementation of REST operations.

Responsibilities:
- Decide whether a request addresses a resource or a collection.
- Map HTTP verbs onto data store calls and shape the response.
"""

# Package marker; handlers are imported directly from submodules.
