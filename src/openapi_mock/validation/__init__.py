"""
openapi_mock.validation

Request validation against the OpenAPI document.

Responsibilities:
- Verify requests carry the credentials their operation's security requires.
"""

# Package marker.
