"""
openapi_mock.mock.semantics

REST semantics inferred from the OpenAPI document.

Responsibilities:
- Pick the success response (status + schema) of an operation.
- Tell collection paths (`/pets`) from resource paths (`/pets/{petId}`).
"""

from __future__ import annotations

from typing import Any

from openapi_mock.openapi.document import OpenApiDocument, OpenApiRequest


def success_response(
    document: OpenApiDocument, operation: dict[str, Any] | None
) -> tuple[int, dict[str, Any] | None]:
    responses = (operation or {}).get("responses") or {}
    codes = sorted(
        int(code) for code in responses if str(code).isdigit() and 200 <= int(code) < 300
    )
    if codes:
        code = codes[0]
        raw = responses.get(str(code), responses.get(code))
        return code, document.resolve(raw)
    if "default" in responses:
        return 200, document.resolve(responses["default"])
    return 200, None


def response_schema(
    document: OpenApiDocument, response: dict[str, Any] | None
) -> dict[str, Any] | None:
    if not response:
        return None
    content = response.get("content")
    if isinstance(content, dict) and content:
        media = content.get("application/json") or next(iter(content.values()))
        schema = (media or {}).get("schema")
    else:
        # Swagger 2 puts the schema directly on the response.
        schema = response.get("schema")
    return document.resolve(schema) if schema is not None else None


def is_collection_schema(schema: dict[str, Any] | None) -> bool:
    return bool(schema) and schema.get("type") == "array"


def is_collection_response(openapi: OpenApiRequest) -> bool:
    _, response = success_response(openapi.document, openapi.operation)
    return is_collection_schema(response_schema(openapi.document, response))


def is_collection_request(openapi: OpenApiRequest) -> bool:
    """
    The GET (or HEAD) operation on the same path is the best hint: an array response
    means a collection. Without one, a path ending in a parameter is a resource.
    """

    getter = openapi.path_item.get("get") or openapi.path_item.get("head")
    if getter is not None:
        _, response = success_response(openapi.document, getter)
        schema = response_schema(openapi.document, response)
        if schema:
            return is_collection_schema(schema)
    return not _ends_with_parameter(openapi.path)


def _ends_with_parameter(template: str) -> bool:
    last = template.rstrip("/").rsplit("/", 1)[-1]
    return "{" in last and last.endswith("}")
