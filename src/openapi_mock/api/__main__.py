"""
openapi_mock.api.__main__

Entrypoint: `python -m openapi_mock.api [path/to/openapi.yaml]`.

The optional argument overrides `OPENAPI_MOCK_OPENAPI_DOCUMENT`.
"""

from __future__ import annotations

import sys

import uvicorn

from openapi_mock.api.app import create_app
from openapi_mock.settings import get_settings


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    settings = get_settings()
    if args:
        settings = settings.model_copy(update={"openapi_document": args[0]})
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
