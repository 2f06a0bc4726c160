"""
openapi_mock.observability.logging

Structured logging configuration for the mock server.

Responsibilities:
- Configure `structlog` for JSON logs tagged with the service and the mocked API.
- Quiet stdlib loggers whose output the request middleware already covers.
- Provide a small wrapper for obtaining bound loggers.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

# uvicorn's access log duplicates `request_completed` from RequestContextMiddleware.
_QUIET_LOGGERS = ("uvicorn.access",)


def configure_logging(
    *,
    service_name: str,
    level: str,
    api_title: str | None = None,
    api_version: str | None = None,
) -> None:
    """
    JSON logs on stdout; every event carries `service` and, when known, `mocked_api`
    (`"<title> <version>"` of the OpenAPI document being served).
    """

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    static_fields: dict[str, Any] = {"service": service_name}
    if api_title:
        static_fields["mocked_api"] = f"{api_title} {api_version}" if api_version else api_title

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_static_fields(static_fields),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_static_fields(fields: dict[str, Any]):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Request-scoped fields (request id, OpenAPI template, operation id) are bound via
# contextvars by `observability.middleware` and `openapi.metadata`.
