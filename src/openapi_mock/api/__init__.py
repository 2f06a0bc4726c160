"""
openapi_mock.api

API package for the mock server.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: request metadata + security + delegation to mock handlers.
