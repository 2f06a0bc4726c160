"""
openapi_mock.openapi

OpenAPI document handling.

Responsibilities:
- Load and query the OpenAPI document being mocked.
- Resolve each HTTP request to its path item and operation.
"""

# Package marker.
