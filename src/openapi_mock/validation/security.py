"""
openapi_mock.validation.security

Security requirement checks.

Responsibilities:
- Decide whether a request carries the auth artifacts its operation asks for.
- Reject the request with 401 + `WWW-Authenticate` when none of the requirements is met.

Note:
- No authentication or authorization happens here; only the presence of
  credentials is verified.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fastapi import Request

from openapi_mock.errors import AuthenticationRequiredError
from openapi_mock.observability.logging import get_logger
from openapi_mock.openapi.metadata import get_openapi, is_openapi_request

log = get_logger(__name__)


def validate_security(request: Request) -> None:
    """
    Any requirement may be met (OR); within a requirement every scheme must be met (AND).
    """

    openapi = get_openapi(request)
    if not is_openapi_request(request) or not openapi.security:
        return

    log.debug("validating_security_requirements")
    schemes = openapi.document.security_schemes
    security_types: list[str] = []

    def requirement_met(requirement: Mapping[str, Any]) -> bool:
        # Empty requirement `{}` means anonymous access is allowed.
        for name in requirement:
            scheme = schemes.get(name)
            if scheme is None:
                log.warning("undefined_security_scheme", scheme=name)
                return False
            scheme_type = str(scheme.get("type", ""))
            if scheme_type not in security_types:
                security_types.append(scheme_type)
            if not scheme_satisfied(request, scheme):
                return False
        return True

    if any(requirement_met(requirement) for requirement in openapi.security):
        return

    types = ", ".join(security_types)
    log.info("authentication_required", security_types=types)
    realm = request.url.hostname or "server"
    raise AuthenticationRequiredError(
        f"{request.method} {request.url.path} requires authentication ({types})",
        headers={"WWW-Authenticate": f'Basic realm="{realm}"'},
    )


def scheme_satisfied(request: Request, scheme: Mapping[str, Any]) -> bool:
    scheme_type = scheme.get("type")
    if scheme_type == "basic":
        # Swagger 2 basic auth: the header must literally start with "Basic ".
        return request.headers.get("authorization", "").startswith("Basic ")
    if scheme_type == "http":
        # RFC 7235 auth-scheme tokens are case-insensitive.
        return _has_authorization(request, str(scheme.get("scheme") or "basic"))
    if scheme_type == "apiKey":
        location = scheme.get("in")
        name = str(scheme.get("name", ""))
        if location == "header":
            return name in request.headers
        if location == "query":
            return name in request.query_params
        if location == "cookie":
            return name in request.cookies
    # oauth2/openIdConnect tokens can't be checked without a provider; assume valid.
    return True


def _has_authorization(request: Request, auth_scheme: str) -> bool:
    value = request.headers.get("authorization", "")
    return value.lower().startswith(f"{auth_scheme.lower()} ")


# --- Module Notes -----------------------------------------------------------
# Used as a dependency of the mock router; the metadata middleware must run first.
