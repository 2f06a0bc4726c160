"""
openapi_mock.errors

HTTP-facing exception hierarchy and FastAPI exception handlers.

Responsibilities:
- Give each mock failure an HTTP status (and optional headers, e.g. WWW-Authenticate).
- Render errors as compact JSON bodies and log unexpected failures.
"""

from __future__ import annotations

from collections.abc import Mapping

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_405_METHOD_NOT_ALLOWED,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from openapi_mock.observability.logging import get_logger

log = get_logger(__name__)


class MockServerError(Exception):
    """
    Base error for anything the mock server answers with a non-2xx status.
    """

    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, headers: Mapping[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.headers = dict(headers or {})

    def to_dict(self) -> dict[str, str]:
        return {"detail": self.message}


class BadRequestError(MockServerError):
    status_code = HTTP_400_BAD_REQUEST


class AuthenticationRequiredError(MockServerError):
    status_code = HTTP_401_UNAUTHORIZED


class NotFoundError(MockServerError):
    status_code = HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not Found", **kwargs) -> None:
        super().__init__(message, **kwargs)


class MethodNotAllowedError(MockServerError):
    status_code = HTTP_405_METHOD_NOT_ALLOWED


async def mock_server_error_handler(request: Request, exc: MockServerError) -> JSONResponse:
    log.info(
        "request_failed",
        status_code=exc.status_code,
        error_type=type(exc).__name__,
        detail=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error(
        "unhandled_exception",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MockServerError, mock_server_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)


# --- Module Notes -----------------------------------------------------------
# Handlers and routes raise these errors; nothing below the API layer builds responses.
