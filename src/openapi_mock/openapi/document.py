"""
openapi_mock.openapi.document

Loading and querying the OpenAPI document.

Responsibilities:
- Read JSON/YAML documents from disk.
- Resolve local `$ref` pointers.
- Match request paths against path templates (honoring the base path).
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

import yaml

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

_TEMPLATE_PARAM = re.compile(r"\{([^}/]+)\}")


class InvalidDocumentError(Exception):
    pass


def load_document(path: str | Path) -> dict[str, Any]:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidDocumentError(f"Unable to read OpenAPI document {source}: {e}") from e

    try:
        if source.suffix.lower() == ".json":
            api = json.loads(text)
        else:
            # YAML is a superset of JSON, so anything else goes through the YAML parser.
            api = yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as e:
        raise InvalidDocumentError(f"Unable to parse OpenAPI document {source}: {e}") from e

    if not isinstance(api, dict) or not isinstance(api.get("paths"), dict):
        raise InvalidDocumentError(f"{source} is not an OpenAPI document (no 'paths' object)")
    return api


@dataclass(slots=True)
class OpenApiRequest:
    """
    OpenAPI metadata for a single request.

    `operation` is None when the path exists in the document but the HTTP method
    does not.
    """

    document: OpenApiDocument
    path: str
    path_item: dict[str, Any]
    operation: dict[str, Any] | None
    path_params: dict[str, str] = field(default_factory=dict)
    security: list[dict[str, list[str]]] = field(default_factory=list)

    @property
    def api(self) -> dict[str, Any]:
        return self.document.api

    @property
    def allowed_methods(self) -> list[str]:
        return [m.upper() for m in HTTP_METHODS if m in self.path_item]


@dataclass(frozen=True, slots=True)
class _Route:
    template: str
    param_names: tuple[str, ...]
    literal: str
    loose: str


class OpenApiDocument:
    def __init__(self, api: dict[str, Any]) -> None:
        if not isinstance(api.get("paths"), dict):
            raise InvalidDocumentError("OpenAPI document has no 'paths' object")
        self.api = api
        self.base_path = _base_path(api)
        # Literal templates are tried before parameterised ones (`/pets/mine` beats `/pets/{id}`).
        self._routes = sorted(
            (_compile(template) for template in api["paths"]),
            key=lambda r: len(r.param_names),
        )

    @property
    def security_schemes(self) -> dict[str, Any]:
        components = self.api.get("components") or {}
        schemes = components.get("securitySchemes") or self.api.get("securityDefinitions") or {}
        return {name: self.resolve(scheme) for name, scheme in schemes.items()}

    def resolve(self, node: Any) -> Any:
        """
        Follow local `$ref` pointers (`#/components/schemas/Pet`) until a concrete node.
        """

        seen: set[str] = set()
        while isinstance(node, dict) and isinstance(node.get("$ref"), str):
            ref = node["$ref"]
            if not ref.startswith("#") or ref in seen:
                raise InvalidDocumentError(f"Unresolvable $ref {ref!r}")
            seen.add(ref)
            node = self._pointer(ref)
        return node

    def _pointer(self, ref: str) -> Any:
        node: Any = self.api
        for token in ref.lstrip("#").split("/")[1:]:
            token = unquote(token).replace("~1", "/").replace("~0", "~")
            if isinstance(node, list) and token.isdigit():
                node = node[int(token)]
            elif isinstance(node, dict) and token in node:
                node = node[token]
            else:
                raise InvalidDocumentError(f"Unresolvable $ref {ref!r}")
        return node

    def relative_path(self, path: str, *, case_sensitive: bool = False) -> str | None:
        base = self.base_path
        if not base:
            return path
        head = path[: len(base)]
        same = head == base if case_sensitive else head.lower() == base.lower()
        if not same:
            return None
        rest = path[len(base) :]
        if rest and not rest.startswith("/"):
            return None
        return rest or "/"

    def match(
        self,
        method: str,
        path: str,
        *,
        case_sensitive: bool = False,
        strict: bool = False,
    ) -> OpenApiRequest | None:
        """
        `path` is the raw, percent-encoded request path; parameters are decoded once here.
        """

        relative = self.relative_path(path, case_sensitive=case_sensitive)
        if relative is None:
            return None

        flags = 0 if case_sensitive else re.IGNORECASE
        for route in self._routes:
            pattern = route.literal if strict else route.loose
            m = re.fullmatch(pattern, relative, flags)
            if m is None:
                continue

            path_item = self.resolve(self.api["paths"][route.template]) or {}
            operation = self._operation(path_item, method)
            params = {name: unquote(value) for name, value in zip(route.param_names, m.groups())}
            return OpenApiRequest(
                document=self,
                path=route.template,
                path_item=path_item,
                operation=operation,
                path_params=params,
                security=self._security(operation),
            )
        return None

    def _operation(self, path_item: dict[str, Any], method: str) -> dict[str, Any] | None:
        method = method.lower()
        operation = path_item.get(method)
        if operation is None and method == "head":
            operation = path_item.get("get")
        return operation

    def _security(self, operation: dict[str, Any] | None) -> list[dict[str, list[str]]]:
        if operation is None:
            return []
        if "security" in operation:
            return list(operation["security"] or [])
        return list(self.api.get("security") or [])


def _compile(template: str) -> _Route:
    names: list[str] = []
    parts: list[str] = []
    pos = 0
    for m in _TEMPLATE_PARAM.finditer(template):
        parts.append(re.escape(template[pos : m.start()]))
        parts.append("([^/]+)")
        names.append(m.group(1))
        pos = m.end()
    parts.append(re.escape(template[pos:]))
    exact = "".join(parts)
    loose = exact.rstrip("/") if exact not in ("", "/") else ""
    return _Route(
        template=template,
        param_names=tuple(names),
        literal=exact,
        loose=loose + "/?",
    )


def _base_path(api: dict[str, Any]) -> str:
    servers = api.get("servers") or []
    if servers and isinstance(servers[0], dict) and servers[0].get("url"):
        path = urlparse(servers[0]["url"]).path
    else:
        path = api.get("basePath") or ""
    # Server variables (`/{version}`) can't be matched statically; treat them as no base path.
    if "{" in path:
        return ""
    return path.rstrip("/")


# --- Module Notes -----------------------------------------------------------
# Only local references are resolved; anything else raises InvalidDocumentError.
